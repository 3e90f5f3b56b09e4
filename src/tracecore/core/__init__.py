"""Core building blocks shared by geometry and materials.

Components:
    ray: Ray data structure, vector helpers and random sampling
    interval: Closed ranges for ray parameters and surface coordinates
    stats: Per-shape-kind intersection counters

``stats`` declares a Taichi field and is therefore not imported here; import
it directly from tracecore.core.stats once Taichi is initialised.
"""

from .interval import (
    Interval,
    empty_interval,
    interval_clamp,
    interval_contains,
    interval_expand,
    interval_size,
    interval_surrounds,
    interval_with_max,
    make_interval,
    unit_interval,
    universe_interval,
    zero_infinite,
)
from .ray import (
    Ray,
    length_squared,
    near_zero,
    normalize,
    random_in_unit_sphere,
    random_unit_vector,
    ray_at,
    vec2,
    vec3,
)

__all__ = [
    "Ray",
    "ray_at",
    "vec2",
    "vec3",
    "length_squared",
    "normalize",
    "near_zero",
    "random_in_unit_sphere",
    "random_unit_vector",
    "Interval",
    "make_interval",
    "empty_interval",
    "universe_interval",
    "zero_infinite",
    "unit_interval",
    "interval_size",
    "interval_contains",
    "interval_surrounds",
    "interval_clamp",
    "interval_expand",
    "interval_with_max",
]
