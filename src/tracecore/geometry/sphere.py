"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*half_b*t + c = 0

where:
    a = dot(direction, direction)
    half_b = dot(direction, oc)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The near root is tried first and the far root second. A root only counts if
it lies beyond SELF_INTERSECTION_EPSILON, which keeps a scattered ray from
re-hitting the surface it just left (shadow acne). The chosen root must then
fall inside the caller's interval.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tracecore.geometry.sphere import make_sphere, hit_sphere
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from tracecore.core.interval import Interval, interval_contains
from tracecore.core.ray import Ray, ray_at
from tracecore.core.stats import ShapeKind, record_intersection_test

from .aabb import AABB, aabb_from_points
from .hit_record import HitRecord, face_normal, make_hit_record, make_miss_record

# Type aliases for vectors using Taichi's math module
vec3 = tm.vec3
vec2 = tm.vec2

# Roots at or below this distance are treated as the ray's own origin surface
SELF_INTERSECTION_EPSILON = 0.001


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius.

    Radius validation happens host side when a sphere is registered in the
    world (see ``scene.world.add_sphere_object``).
    """
    return Sphere(center=center, radius=radius)


@ti.func
def sphere_normal(sphere: Sphere, p: vec3) -> vec3:
    """Outward unit normal of the sphere at surface point p."""
    return tm.normalize(p - sphere.center)


@ti.func
def sphere_theta(p: vec3) -> ti.f32:
    """Polar angle of a unit-sphere point, measured up from y = -1.

    Args:
        p: A point on the unit sphere centred at the origin.

    Returns:
        acos(-p.y), in [0, pi]: 0 at the bottom pole, pi/2 on the equator.
    """
    # Clamp so rounding just outside [-1, 1] cannot produce NaN
    return ti.acos(ti.min(ti.max(-p.y, -1.0), 1.0))


@ti.func
def sphere_uv(p: vec3) -> vec2:
    """Map a unit-sphere point to surface coordinates.

    theta is the angle up from y = -1 and phi the angle around the y axis
    starting from x = -1:
        theta = acos(-y)
        phi = atan2(-z, x) + pi
        uv = (phi / 2pi, theta / pi)

    Args:
        p: A point on the unit sphere centred at the origin.

    Returns:
        The (u, v) coordinates, each in [0, 1].
    """
    theta = sphere_theta(p)
    phi = ti.atan2(-p.z, p.x) + tm.pi
    return vec2(phi / (2.0 * tm.pi), theta / tm.pi)


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, interval: Interval) -> HitRecord:
    """Test for ray-sphere intersection.

    Args:
        ray: The ray to test. The direction need not be normalized.
        sphere: The sphere to test intersection against.
        interval: Range of ray parameters that count as a valid hit.

    Returns:
        A populated HitRecord, or the Miss record when the ray misses, both
        roots fail the self-intersection guard, or the chosen root is outside
        the interval.
    """
    record_intersection_test(int(ShapeKind.SPHERE))

    # Vector from sphere center to ray origin
    oc = ray.origin - sphere.center

    a = tm.dot(ray.direction, ray.direction)
    half_b = tm.dot(ray.direction, oc)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius

    # Discriminant (using half-b form: h^2 - ac instead of b^2 - 4ac)
    discriminant = half_b * half_b - a * c

    result = make_miss_record()

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)

        # Near root first, far root as fallback
        t = (-half_b - sqrt_d) / a
        found = t > SELF_INTERSECTION_EPSILON
        if not found:
            t = (-half_b + sqrt_d) / a
            found = t > SELF_INTERSECTION_EPSILON

        # Both roots behind or on the origin surface is an explicit miss,
        # whatever the interval admits
        if found and interval_contains(interval, t):
            point = ray_at(ray, t)
            outward_normal = sphere_normal(sphere, point)
            normal, front_face = face_normal(outward_normal, ray.direction)
            result = make_hit_record(t, point, normal, front_face, sphere_uv(outward_normal))

    return result


@ti.func
def sphere_bounding_box(sphere: Sphere) -> AABB:
    """Box spanning center - radius to center + radius on every axis."""
    r = ti.abs(sphere.radius)
    offset = vec3(r, r, r)
    return aabb_from_points(sphere.center - offset, sphere.center + offset)
