"""World registry: the objects a renderer traces against.

Objects are stored in Taichi fields (structure of arrays) and rebuilt into
Object structs on the device when queried. Every object slot carries both a
sphere and a quad payload; the kind field says which one is live.

Validation happens here, on the host, when an object is added. Device code
therefore never sees a degenerate quad, a non-positive radius or an
out-of-range albedo.

Example:
    >>> from tracecore.scene.world import add_sphere_object, clear_world
    >>> from tracecore.materials.material import MaterialSpec
    >>> clear_world()
    >>> add_sphere_object((0, 0, -1), 0.5, MaterialSpec.lambertian((0.8, 0.3, 0.3)))
    >>> # Use intersect_world within a Taichi kernel
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import taichi as ti
import taichi.math as tm

from tracecore.core.interval import Interval, interval_with_max
from tracecore.core.ray import Ray
from tracecore.core.stats import ShapeKind
from tracecore.errors import ShapeError
from tracecore.geometry.aabb import empty_aabb, aabb_union
from tracecore.geometry.hit_record import HitRecord, make_miss_record
from tracecore.geometry.quad import Quad, quad_frame
from tracecore.geometry.shape import Shape, shape_bounding_box
from tracecore.geometry.sphere import Sphere
from tracecore.materials.material import Material, MaterialSpec, ScatterRecord, make_no_scatter
from tracecore.materials.texture import Texture

from .object import Object, check_object_collision_in, scatter_object_ray

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of objects supported in the world
MAX_OBJECTS = 1024


@ti.dataclass
class WorldHit:
    """Closest hit of a ray against the world.

    Attributes:
        record: The HitRecord of the nearest object (hit == 0 for a Miss).
        object_index: Index of the object that was hit, -1 for a Miss.
    """

    record: HitRecord
    object_index: ti.i32


@dataclass
class ObjectInfo:
    """Host-side record of an object added to the world.

    Attributes:
        index: The object's slot in the world fields.
        kind: The ShapeKind of the object.
        geometry: The construction parameters (center/radius or Q/u/v).
        material: The material description.
    """

    index: int
    kind: ShapeKind
    geometry: dict[str, Union[tuple[float, float, float], float]]
    material: MaterialSpec


# Shape storage
object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
quad_corners = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
quad_edge_u = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
quad_edge_v = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
quad_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
quad_offsets = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
quad_ws = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)

# Material storage
material_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
texture_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
albedo_colours = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
albedo_odd_colours = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
albedo_inv_scales = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)

num_objects = ti.field(dtype=ti.i32, shape=())

# Scratch output of the bounds kernel
_bounds_min = ti.Vector.field(3, dtype=ti.f32, shape=())
_bounds_max = ti.Vector.field(3, dtype=ti.f32, shape=())
_bounds_empty = ti.field(dtype=ti.i32, shape=())

_object_infos: list[ObjectInfo] = []


def clear_world() -> None:
    """Remove every object from the world.

    Resets the object count to zero. Field data is not cleared but will be
    overwritten when new objects are added.
    """
    num_objects[None] = 0
    _object_infos.clear()


def get_object_count() -> int:
    """Get the number of objects in the world."""
    return int(num_objects[None])


def get_object_info(index: int) -> ObjectInfo:
    """Get the host-side record of the object at index.

    Raises:
        IndexError: If no object has that index.
    """
    return _object_infos[index]


def _check_point(name: str, value) -> np.ndarray:
    arr = np.asarray(value, dtype=np.float64)
    if arr.shape != (3,) or not np.all(np.isfinite(arr)):
        raise ShapeError(f"{name} must be a finite 3-vector, got {value!r}")
    return arr


def _next_slot() -> int:
    idx = num_objects[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    return idx


def _store_material(idx: int, material: MaterialSpec) -> None:
    material_kinds[idx] = int(material.kind)
    texture_kinds[idx] = int(material.texture_kind)
    albedo_colours[idx] = material.colour
    albedo_odd_colours[idx] = material.odd_colour
    albedo_inv_scales[idx] = 1.0 / material.checker_scale


def add_sphere_object(center, radius: float, material: MaterialSpec) -> int:
    """Add a sphere to the world.

    Args:
        center: The center point of the sphere as a 3-sequence.
        radius: The radius of the sphere.
        material: The sphere's material.

    Returns:
        The index of the added object.

    Raises:
        ShapeError: If center is not a finite 3-vector or radius is not a
            positive finite number.
        RuntimeError: If the maximum number of objects is exceeded.
    """
    c = _check_point("Sphere center", center)
    if not math.isfinite(radius) or radius <= 0.0:
        raise ShapeError(f"Sphere radius must be positive and finite, got {radius}")

    idx = _next_slot()
    object_kinds[idx] = int(ShapeKind.SPHERE)
    sphere_centers[idx] = c.tolist()
    sphere_radii[idx] = radius
    _store_material(idx, material)
    num_objects[None] = idx + 1

    _object_infos.append(
        ObjectInfo(
            index=idx,
            kind=ShapeKind.SPHERE,
            geometry={"center": tuple(c.tolist()), "radius": float(radius)},
            material=material,
        )
    )
    logger.debug("Added sphere %d: center=%s radius=%.4f", idx, c.tolist(), radius)
    return idx


def add_quad_object(q, u, v, material: MaterialSpec) -> int:
    """Add a quad to the world.

    The quad represents a parallelogram with vertices at Q, Q+u, Q+v, Q+u+v.
    Its plane frame is computed here, once.

    Args:
        q: The corner point of the quad.
        u: Edge vector from q to adjacent corner.
        v: Edge vector from q to other adjacent corner.
        material: The quad's material.

    Returns:
        The index of the added object.

    Raises:
        ShapeError: If the vectors are not finite or u and v are parallel.
        RuntimeError: If the maximum number of objects is exceeded.
    """
    normal, d, w = quad_frame(q, u, v)

    idx = _next_slot()
    object_kinds[idx] = int(ShapeKind.QUAD)
    quad_corners[idx] = list(map(float, q))
    quad_edge_u[idx] = list(map(float, u))
    quad_edge_v[idx] = list(map(float, v))
    quad_normals[idx] = normal.tolist()
    quad_offsets[idx] = d
    quad_ws[idx] = w.tolist()
    _store_material(idx, material)
    num_objects[None] = idx + 1

    geometry = {name: tuple(map(float, vec)) for name, vec in (("Q", q), ("u", u), ("v", v))}
    _object_infos.append(
        ObjectInfo(index=idx, kind=ShapeKind.QUAD, geometry=geometry, material=material)
    )
    logger.debug(
        "Added quad %d: Q=%s u=%s v=%s normal=%s",
        idx,
        geometry["Q"],
        geometry["u"],
        geometry["v"],
        normal.tolist(),
    )
    return idx


@ti.func
def get_object(i: ti.i32) -> Object:
    """Rebuild the Object stored at slot i."""
    shape = Shape(
        kind=object_kinds[i],
        sphere=Sphere(center=sphere_centers[i], radius=sphere_radii[i]),
        quad=Quad(
            Q=quad_corners[i],
            u=quad_edge_u[i],
            v=quad_edge_v[i],
            normal=quad_normals[i],
            d=quad_offsets[i],
            w=quad_ws[i],
        ),
    )
    material = Material(
        kind=material_kinds[i],
        albedo=Texture(
            kind=texture_kinds[i],
            colour=albedo_colours[i],
            odd_colour=albedo_odd_colours[i],
            inv_scale=albedo_inv_scales[i],
        ),
    )
    return Object(shape=shape, material=material)


@ti.func
def intersect_world(ray: Ray, interval: Interval) -> WorldHit:
    """Find the closest object hit by a ray.

    The interval's upper bound shrinks to each hit as it is found, so later
    objects only count if they are strictly closer in parameter space.

    Args:
        ray: The ray to trace.
        interval: Range of ray parameters that count as a valid hit.

    Returns:
        A WorldHit for the nearest object, or a Miss record with
        object_index -1.
    """
    closest = interval
    result = WorldHit(record=make_miss_record(), object_index=-1)

    for i in range(num_objects[None]):
        rec = check_object_collision_in(get_object(i), ray, closest)
        if rec.hit == 1:
            closest = interval_with_max(closest, rec.t)
            result = WorldHit(record=rec, object_index=i)

    return result


@ti.func
def scatter_world_hit(ray: Ray, hit: WorldHit) -> ScatterRecord:
    """Scatter a ray off the object recorded in a WorldHit.

    A Miss never scatters.
    """
    result = make_no_scatter()
    if hit.record.hit == 1:
        result = scatter_object_ray(get_object(hit.object_index), ray, hit.record)
    return result


@ti.kernel
def _compute_world_bounds():
    box = empty_aabb()
    ti.loop_config(serialize=True)
    for i in range(num_objects[None]):
        box = aabb_union(box, shape_bounding_box(get_object(i).shape))
    _bounds_empty[None] = box.empty
    _bounds_min[None] = vec3(box.x.min, box.y.min, box.z.min)
    _bounds_max[None] = vec3(box.x.max, box.y.max, box.z.max)


def world_bounding_box() -> Optional[tuple[tuple[float, float, float], tuple[float, float, float]]]:
    """Compute the box enclosing every object in the world.

    Returns:
        (min_corner, max_corner), or None for an empty world.
    """
    _compute_world_bounds()
    if _bounds_empty[None] == 1:
        return None
    lo = _bounds_min[None]
    hi = _bounds_max[None]
    return (float(lo[0]), float(lo[1]), float(lo[2])), (float(hi[0]), float(hi[1]), float(hi[2]))
