"""Closed numeric ranges for ray parameters and surface coordinates.

An Interval bounds which ray parameters count as a valid hit. Keeping the
"is t numerically valid" question separate from "is t the nearest hit" lets
a caller shrink the upper bound to the closest hit found so far and reuse the
same shape tests unchanged (see ``scene.world.intersect_world``).

Distinguished values are exposed as functions so every caller gets a fresh
struct:

    empty_interval()     [0, 0], contains nothing meaningful
    universe_interval()  [-inf, +inf]
    zero_infinite()      [0, +inf), the canonical ray-parameter domain
    unit_interval()      [0, 1], the extent of a quad in its own basis
"""

import taichi as ti
import taichi.math as tm


@ti.dataclass
class Interval:
    """A closed range [min, max].

    Attributes:
        min: Lower bound (inclusive).
        max: Upper bound (inclusive).
    """

    min: ti.f32
    max: ti.f32


@ti.func
def make_interval(lo: ti.f32, hi: ti.f32) -> Interval:
    """Create an interval. Callers are responsible for lo <= hi."""
    return Interval(min=lo, max=hi)


@ti.func
def empty_interval() -> Interval:
    return Interval(min=0.0, max=0.0)


@ti.func
def universe_interval() -> Interval:
    return Interval(min=-tm.inf, max=tm.inf)


@ti.func
def zero_infinite() -> Interval:
    return Interval(min=0.0, max=tm.inf)


@ti.func
def unit_interval() -> Interval:
    return Interval(min=0.0, max=1.0)


@ti.func
def interval_size(interval: Interval) -> ti.f32:
    return interval.max - interval.min


@ti.func
def interval_contains(interval: Interval, t: ti.f32) -> ti.i32:
    """Check whether t lies in the interval, both ends inclusive.

    Args:
        interval: The range to test against.
        t: The value to test.

    Returns:
        1 if interval.min <= t <= interval.max, 0 otherwise.
    """
    return interval.min <= t and t <= interval.max


@ti.func
def interval_surrounds(interval: Interval, t: ti.f32) -> ti.i32:
    """Strict variant of interval_contains (both ends exclusive)."""
    return interval.min < t and t < interval.max


@ti.func
def interval_clamp(interval: Interval, t: ti.f32) -> ti.f32:
    """Saturate t into [interval.min, interval.max]."""
    result = t
    if t < interval.min:
        result = interval.min
    elif t > interval.max:
        result = interval.max
    return result


@ti.func
def interval_expand(a: Interval, b: Interval) -> Interval:
    """Return the smallest interval enclosing both a and b.

    Args:
        a: First interval.
        b: Second interval.

    Returns:
        Interval(min(a.min, b.min), max(a.max, b.max)).
    """
    return Interval(min=ti.min(a.min, b.min), max=ti.max(a.max, b.max))


@ti.func
def interval_with_max(interval: Interval, t: ti.f32) -> Interval:
    """Copy of the interval with its upper bound replaced by t."""
    return Interval(min=interval.min, max=t)
