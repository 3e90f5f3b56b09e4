"""Renderer-facing object: one Shape paired with one Material.

Objects add no logic of their own. Collision checks go to the shape and
scattering goes to the material, so a renderer only ever handles one kind of
thing per scene entry.
"""

import taichi as ti

from tracecore.core.interval import Interval, zero_infinite
from tracecore.core.ray import Ray
from tracecore.geometry.hit_record import HitRecord
from tracecore.geometry.shape import Shape, check_collision
from tracecore.materials.material import Material, ScatterRecord, scatter


@ti.dataclass
class Object:
    """A shape with its shading policy.

    Attributes:
        shape: The geometry.
        material: How rays scatter off the geometry.
    """

    shape: Shape
    material: Material


@ti.func
def make_object(shape: Shape, material: Material) -> Object:
    return Object(shape=shape, material=material)


@ti.func
def check_object_collision(obj: Object, ray: Ray) -> HitRecord:
    """Intersect a ray with the object over the whole forward ray, [0, +inf)."""
    return check_collision(ray, obj.shape, zero_infinite())


@ti.func
def check_object_collision_in(obj: Object, ray: Ray, interval: Interval) -> HitRecord:
    """Intersect a ray with the object, accepting only t in interval."""
    return check_collision(ray, obj.shape, interval)


@ti.func
def scatter_object_ray(obj: Object, ray: Ray, rec: HitRecord) -> ScatterRecord:
    """Scatter a ray that hit this object.

    Args:
        obj: The object that was hit.
        ray: The incoming ray.
        rec: The hit record the renderer got from check_object_collision.

    Returns:
        The material's ScatterRecord.
    """
    return scatter(obj.material, ray, rec)
