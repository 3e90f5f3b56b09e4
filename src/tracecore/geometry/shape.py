"""Shape sum type dispatching to the sphere and quad primitives.

A Shape carries a kind tag and one payload slot per primitive; only the slot
named by the tag is meaningful. Shapes are only ever built through
``sphere_shape`` / ``quad_shape`` (device side) or the world registry (host
side, with validation), so there is no unset kind to guard against.
"""

import taichi as ti
import taichi.math as tm

from tracecore.core.interval import Interval
from tracecore.core.ray import Ray
from tracecore.core.stats import ShapeKind

from .aabb import AABB, empty_aabb
from .hit_record import HitRecord, make_miss_record
from .quad import Quad, hit_quad, quad_bounding_box, quad_normal
from .sphere import Sphere, hit_sphere, sphere_bounding_box, sphere_normal

vec3 = tm.vec3


@ti.dataclass
class Shape:
    """A tagged geometric primitive.

    Attributes:
        kind: The ShapeKind of the payload.
        sphere: Payload when kind == ShapeKind.SPHERE.
        quad: Payload when kind == ShapeKind.QUAD.
    """

    kind: ti.i32
    sphere: Sphere
    quad: Quad


@ti.func
def sphere_shape(sphere: Sphere) -> Shape:
    return Shape(kind=int(ShapeKind.SPHERE), sphere=sphere)


@ti.func
def quad_shape(quad: Quad) -> Shape:
    return Shape(kind=int(ShapeKind.QUAD), quad=quad)


@ti.func
def check_collision(ray: Ray, shape: Shape, interval: Interval) -> HitRecord:
    """Intersect a ray with any shape.

    Args:
        ray: The ray to test.
        shape: The shape to test against.
        interval: Range of ray parameters that count as a valid hit.

    Returns:
        The primitive's HitRecord (hit == 0 for a Miss).
    """
    rec = make_miss_record()
    if shape.kind == int(ShapeKind.SPHERE):
        rec = hit_sphere(ray, shape.sphere, interval)
    else:
        rec = hit_quad(ray, shape.quad, interval)
    return rec


@ti.func
def shape_normal(shape: Shape, p: vec3) -> vec3:
    """Outward geometric normal of the shape at surface point p.

    This is the normal before orientation against a ray.
    """
    n = vec3(0.0, 0.0, 0.0)
    if shape.kind == int(ShapeKind.SPHERE):
        n = sphere_normal(shape.sphere, p)
    else:
        n = quad_normal(shape.quad)
    return n


@ti.func
def shape_bounding_box(shape: Shape) -> AABB:
    """Bounding box of the shape."""
    box = empty_aabb()
    if shape.kind == int(ShapeKind.SPHERE):
        box = sphere_bounding_box(shape.sphere)
    else:
        box = quad_bounding_box(shape.quad)
    return box
