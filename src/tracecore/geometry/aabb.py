"""Axis-aligned bounding boxes built from shape geometry.

A box is three per-axis Intervals plus an explicit empty flag. The empty box
encloses nothing and is the identity of ``aabb_union``, so a scene's bounds
can be accumulated starting from ``empty_aabb()``.

Only construction lives here. Boxes are meant to feed a future spatial
acceleration structure; nothing in this package traverses them.
"""

import taichi as ti
import taichi.math as tm

from tracecore.core.interval import Interval, interval_contains, interval_expand

vec3 = tm.vec3


@ti.dataclass
class AABB:
    """An axis-aligned box.

    Attributes:
        x: Extent along the x axis.
        y: Extent along the y axis.
        z: Extent along the z axis.
        empty: 1 for the sentinel box that encloses nothing. The axis
            intervals of an empty box are meaningless.
    """

    x: Interval
    y: Interval
    z: Interval
    empty: ti.i32


@ti.func
def empty_aabb() -> AABB:
    """Return the sentinel box that encloses nothing."""
    return AABB(empty=1)


@ti.func
def aabb_from_points(p0: vec3, p1: vec3) -> AABB:
    """Build the minimal box enclosing two corner points.

    The corners may be given in any order; each axis takes the per-component
    minimum and maximum.

    Args:
        p0: One corner.
        p1: The opposite corner.

    Returns:
        The enclosing AABB.
    """
    return AABB(
        x=Interval(min=ti.min(p0.x, p1.x), max=ti.max(p0.x, p1.x)),
        y=Interval(min=ti.min(p0.y, p1.y), max=ti.max(p0.y, p1.y)),
        z=Interval(min=ti.min(p0.z, p1.z), max=ti.max(p0.z, p1.z)),
        empty=0,
    )


@ti.func
def aabb_union(a: AABB, b: AABB) -> AABB:
    """Return the smallest box enclosing both a and b.

    Args:
        a: First box.
        b: Second box.

    Returns:
        The union box. If either input is empty the other is returned.
    """
    result = a
    if a.empty == 1:
        result = b
    elif b.empty == 0:
        result = AABB(
            x=interval_expand(a.x, b.x),
            y=interval_expand(a.y, b.y),
            z=interval_expand(a.z, b.z),
            empty=0,
        )
    return result


@ti.func
def aabb_axis(box: AABB, n: ti.i32) -> Interval:
    """Return the interval of axis n (0 = x, 1 = y, 2 = z)."""
    result = box.x
    if n == 1:
        result = box.y
    elif n == 2:
        result = box.z
    return result


@ti.func
def aabb_contains_point(box: AABB, p: vec3) -> ti.i32:
    """Check whether p lies inside the box, faces included.

    Always 0 for the empty box.
    """
    inside = 0
    if box.empty == 0:
        inside = (
            interval_contains(box.x, p.x)
            and interval_contains(box.y, p.y)
            and interval_contains(box.z, p.z)
        )
    return inside
