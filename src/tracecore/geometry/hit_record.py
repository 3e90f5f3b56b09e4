"""Hit record produced by a ray-shape intersection test.

A test returns exactly one HitRecord by value: either a populated hit or the
Miss record (hit == 0, every other field zero). The record is written once by
the winning shape test and read once by the scatter step that follows.
"""

import taichi as ti
import taichi.math as tm

vec3 = tm.vec3
vec2 = tm.vec2


@ti.dataclass
class HitRecord:
    """Record of a ray-shape intersection.

    Attributes:
        hit: 1 if the ray intersected the shape, 0 for a Miss.
        t: The ray parameter of the intersection.
        point: The 3D point where the ray intersected the surface.
        normal: Unit surface normal, always facing against the incoming ray
            (dot(normal, ray.direction) <= 0).
        front_face: 1 if the ray struck the outward-facing side, 0 if it
            arrived from inside / behind.
        uv: Surface coordinates in [0, 1] x [0, 1], used for texture lookup.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    front_face: ti.i32
    uv: vec2


@ti.func
def make_miss_record() -> HitRecord:
    """Create the Miss record.

    Returns:
        A HitRecord with hit=0 and every other field zero.
    """
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        uv=vec2(0.0, 0.0),
    )


@ti.func
def make_hit_record(
    t: ti.f32, point: vec3, normal: vec3, front_face: ti.i32, uv: vec2
) -> HitRecord:
    """Create a populated hit record."""
    return HitRecord(hit=1, t=t, point=point, normal=normal, front_face=front_face, uv=uv)


@ti.func
def face_normal(outward_normal: vec3, direction: vec3):
    """Orient a geometric normal against the incoming ray.

    If the ray approaches from outside (dot(n, d) < 0) the outward normal is
    kept and the hit is a front face. Otherwise the normal is negated and the
    hit is a back face. Either way the returned normal opposes the ray, so
    shading code never has to check which side it is on.

    Args:
        outward_normal: The shape's geometric normal at the hit point (unit).
        direction: The ray direction.

    Returns:
        Tuple of (normal, front_face).
    """
    normal = outward_normal
    front_face = 1
    if tm.dot(outward_normal, direction) >= 0.0:
        normal = -outward_normal
        front_face = 0
    return normal, front_face
