"""Lambertian (ideal diffuse) scattering.

The outgoing direction is the surface normal plus a random unit vector,
which yields a cosine-weighted distribution over the hemisphere around the
normal. With that distribution the BRDF's cosine term and the sampling PDF
cancel, so the attenuation of a scatter is exactly the albedo:

    BRDF = albedo / pi
    pdf = cos_theta / pi
    attenuation = (albedo / pi) * cos_theta / (cos_theta / pi) = albedo

Example:
    >>> # Use within a Taichi kernel:
    >>> # direction, attenuation = scatter_lambertian(albedo, normal)
"""

import taichi as ti
import taichi.math as tm

from tracecore.core.ray import near_zero, random_unit_vector

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def offset_direction(normal: vec3, offset: vec3) -> vec3:
    """Offset a normal by a unit vector, falling back to the bare normal.

    If the offset cancels the normal the sum collapses to (nearly) zero;
    the bare normal is used instead so no zero or NaN direction is returned.

    Args:
        normal: The surface normal at the hit point (unit, facing the ray).
        offset: A unit vector added to the normal.

    Returns:
        The unnormalized scatter direction.
    """
    direction = normal + offset
    if near_zero(direction):
        direction = normal
    return direction


@ti.func
def lambertian_direction(normal: vec3) -> vec3:
    """Sample a diffuse scatter direction around a normal."""
    return offset_direction(normal, random_unit_vector())


@ti.func
def scatter_lambertian(albedo: vec3, normal: vec3):
    """Sample a scattered ray direction for a Lambertian surface.

    Args:
        albedo: The diffuse reflectance colour at the hit (RGB).
        normal: The surface normal at the hit point (should be normalized).

    Returns:
        A tuple of (scattered_direction, attenuation) where attenuation is
        the albedo, unchanged.
    """
    return lambertian_direction(normal), albedo
