"""Quad primitive with ray-quad intersection.

A quad is defined by:
- Q: A corner point of the quad
- u: Edge vector from Q to adjacent corner
- v: Edge vector from Q to other adjacent corner

The quad spans the parallelogram Q, Q+u, Q+v, Q+u+v. Its frame is derived
once when the quad is built:
- n = cross(u, v)
- normal = normalize(n), pointing by the right-hand rule
- d = dot(normal, Q), the plane offset
- w = n / dot(n, n), used to project hit points into the (u, v) basis

Ray-quad intersection uses the parametric plane test:
1. Find where ray intersects the plane containing the quad
2. Express the hit in the quad's basis as P = Q + alpha*u + beta*v
3. Accept only 0 <= alpha <= 1 and 0 <= beta <= 1

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tracecore.geometry.quad import make_quad, hit_quad
    >>> # Floor quad at y=0, spanning x=[0,1] and z=[0,1]
    >>> # quad = make_quad(vec3(0, 0, 0), vec3(1, 0, 0), vec3(0, 0, 1))
"""

import numpy as np
import taichi as ti
import taichi.math as tm

from tracecore.core.interval import Interval, interval_contains, unit_interval
from tracecore.core.ray import Ray, ray_at
from tracecore.core.stats import ShapeKind, record_intersection_test
from tracecore.errors import ShapeError

from .aabb import AABB, aabb_from_points, aabb_union
from .hit_record import HitRecord, face_normal, make_hit_record, make_miss_record

# Type aliases for vectors using Taichi's math module
vec3 = tm.vec3
vec2 = tm.vec2

# Rays whose direction is this close to the plane are treated as parallel
PARALLEL_EPSILON = 1e-8


@ti.dataclass
class Quad:
    """A quad (parallelogram) with its precomputed plane frame.

    Attributes:
        Q: The corner point of the quad (vec3).
        u: Edge vector from Q to adjacent corner (vec3).
        v: Edge vector from Q to other adjacent corner (vec3).
        normal: Unit plane normal, normalize(cross(u, v)).
        d: Plane offset, dot(normal, Q).
        w: cross(u, v) / dot(cross(u, v), cross(u, v)).
    """

    Q: vec3
    u: vec3
    v: vec3
    normal: vec3
    d: ti.f32
    w: vec3


@ti.func
def make_quad(q: vec3, u: vec3, v: vec3) -> Quad:
    """Create a quad from corner point and edge vectors.

    The frame is computed here, once, not per intersection test.

    Args:
        q: The corner point of the quad.
        u: Edge vector from q to adjacent corner.
        v: Edge vector from q to other adjacent corner.

    Returns:
        A new Quad instance.
    """
    n = tm.cross(u, v)
    normal = tm.normalize(n)
    return Quad(Q=q, u=u, v=v, normal=normal, d=tm.dot(normal, q), w=n / tm.dot(n, n))


def quad_frame(q, u, v) -> tuple[np.ndarray, float, np.ndarray]:
    """Compute a quad's plane frame on the host.

    This mirrors ``make_quad`` for quads that are stored in Taichi fields,
    and is where degenerate geometry is rejected.

    Args:
        q: Corner point as a 3-sequence.
        u: First edge vector as a 3-sequence.
        v: Second edge vector as a 3-sequence.

    Returns:
        Tuple of (normal, d, w).

    Raises:
        ShapeError: If any input is not a finite 3-vector, or u and v are
            parallel (the quad spans no plane).
    """
    q, u, v = (np.asarray(x, dtype=np.float64) for x in (q, u, v))
    for name, vec in (("Q", q), ("u", u), ("v", v)):
        if vec.shape != (3,) or not np.all(np.isfinite(vec)):
            raise ShapeError(f"Quad {name} must be a finite 3-vector, got {vec!r}")

    n = np.cross(u, v)
    n_dot_n = float(np.dot(n, n))
    if n_dot_n < 1e-12:
        raise ShapeError(f"Quad edges u={u.tolist()} and v={v.tolist()} are parallel")

    normal = n / np.sqrt(n_dot_n)
    d = float(np.dot(normal, q))
    w = n / n_dot_n
    return normal, d, w


@ti.func
def hit_quad(ray: Ray, quad: Quad, interval: Interval) -> HitRecord:
    """Test for ray-quad intersection.

    Taking the dot product of the ray equation with the plane normal gives:
        t = (d - dot(normal, ray_origin)) / dot(normal, ray_direction)

    The hit point is then projected into the quad's basis:
        alpha = dot(w, cross(P - Q, v))
        beta = dot(w, cross(u, P - Q))

    Args:
        ray: The ray to test. The direction need not be normalized.
        quad: The quad to test intersection against.
        interval: Range of ray parameters that count as a valid hit.

    Returns:
        A populated HitRecord with uv = (alpha, beta), or the Miss record when
        the ray is parallel to the plane, the plane hit is outside the
        interval, or the hit lies outside the quad.
    """
    record_intersection_test(int(ShapeKind.QUAD))

    denom = tm.dot(quad.normal, ray.direction)
    result = make_miss_record()

    if ti.abs(denom) >= PARALLEL_EPSILON:
        t = (quad.d - tm.dot(quad.normal, ray.origin)) / denom

        if interval_contains(interval, t):
            hit_point = ray_at(ray, t)

            planar = hit_point - quad.Q
            alpha = tm.dot(quad.w, tm.cross(planar, quad.v))
            beta = tm.dot(quad.w, tm.cross(quad.u, planar))

            extent = unit_interval()
            if interval_contains(extent, alpha) and interval_contains(extent, beta):
                normal, front_face = face_normal(quad.normal, ray.direction)
                result = make_hit_record(t, hit_point, normal, front_face, vec2(alpha, beta))

    return result


@ti.func
def quad_normal(quad: Quad) -> vec3:
    """Return the quad's unit plane normal."""
    return quad.normal


@ti.func
def quad_area(quad: Quad) -> ti.f32:
    """Area of the quad, the magnitude of cross(u, v)."""
    return tm.length(tm.cross(quad.u, quad.v))


@ti.func
def quad_bounding_box(quad: Quad) -> AABB:
    """Box enclosing the quad.

    The union of the boxes spanned by the two diagonals (Q, Q+u+v) and
    (Q+u, Q+v) covers all four corners without any epsilon padding.
    """
    diagonal_1 = aabb_from_points(quad.Q, quad.Q + quad.u + quad.v)
    diagonal_2 = aabb_from_points(quad.Q + quad.u, quad.Q + quad.v)
    return aabb_union(diagonal_1, diagonal_2)
