"""Diagnostic counters for intersection tests.

Every sphere and quad test bumps the counter for its shape kind. The counts
are instrumentation only: nothing in the intersection or scattering code
reads them back, so they cannot change a result.

Counters live in a Taichi field and are bumped with an atomic add, so they
stay exact when a kernel traces rays in parallel. No ordering between
increments is guaranteed or needed.

Example:
    >>> from tracecore.core.stats import get_intersection_counts
    >>> reset_intersection_counts()
    >>> # ... run a kernel that calls check_collision ...
    >>> get_intersection_counts()
    {'sphere': 12, 'quad': 30}
"""

from enum import IntEnum

import taichi as ti


class ShapeKind(IntEnum):
    """Enumeration of supported shape kinds.

    Used both as the Shape tag and as the index into the counter field.
    """

    SPHERE = 0
    QUAD = 1


NUM_SHAPE_KINDS = len(ShapeKind)

intersection_counts = ti.field(dtype=ti.i32, shape=NUM_SHAPE_KINDS)


@ti.func
def record_intersection_test(kind: ti.i32):
    """Count one intersection test against a shape of the given kind."""
    ti.atomic_add(intersection_counts[kind], 1)


def reset_intersection_counts() -> None:
    """Zero every counter."""
    intersection_counts.fill(0)


def get_intersection_counts() -> dict[str, int]:
    """Snapshot the counters keyed by lower-case shape kind name."""
    return {kind.name.lower(): int(intersection_counts[int(kind)]) for kind in ShapeKind}
