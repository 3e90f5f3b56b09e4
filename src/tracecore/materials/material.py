"""Material sum type and scattering dispatch.

A Material decides what happens to a ray at a hit:

- NONE: the surface never scatters. It models unlit or invisible surfaces
  and is a fully constructed material, not a placeholder.
- LAMBERTIAN: diffuse scattering with an albedo texture.

``scatter`` is a pure function of (material, incoming ray, hit record) apart
from the random numbers it draws. It returns a ScatterRecord whose
``scattered`` flag is 0 when the material declines to scatter.

Host-side scene code describes materials with MaterialSpec, which validates
parameters before anything reaches a Taichi field.
"""

from dataclasses import dataclass
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from tracecore.core.ray import Ray
from tracecore.errors import MaterialError
from tracecore.geometry.hit_record import HitRecord

from .lambertian import scatter_lambertian
from .texture import Texture, TextureKind, get_texture_colour, solid_texture

vec3 = tm.vec3


class MaterialKind(IntEnum):
    """Enumeration of supported material kinds.

    Used for material dispatch in ``scatter``.
    """

    NONE = 0
    LAMBERTIAN = 1


@ti.dataclass
class Material:
    """A tagged scattering policy.

    Attributes:
        kind: The MaterialKind.
        albedo: Diffuse reflectance texture (unused for NONE).
    """

    kind: ti.i32
    albedo: Texture


@ti.dataclass
class ScatterRecord:
    """Result of scattering a ray off a material.

    Attributes:
        scattered: 1 if the material produced an outgoing ray, 0 otherwise.
        attenuation: Colour the traced radiance is multiplied by.
            Only valid if scattered == 1.
        ray: The outgoing ray. Only valid if scattered == 1.
    """

    scattered: ti.i32
    attenuation: vec3
    ray: Ray


@ti.func
def none_material() -> Material:
    return Material(kind=int(MaterialKind.NONE))


@ti.func
def lambertian_material(albedo: Texture) -> Material:
    return Material(kind=int(MaterialKind.LAMBERTIAN), albedo=albedo)


@ti.func
def lambertian_colour(colour: vec3) -> Material:
    """Lambertian material with a solid albedo colour."""
    return lambertian_material(solid_texture(colour))


@ti.func
def make_no_scatter() -> ScatterRecord:
    return ScatterRecord(
        scattered=0,
        attenuation=vec3(0.0, 0.0, 0.0),
        ray=Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 0.0)),
    )


@ti.func
def scatter(material: Material, ray_in: Ray, rec: HitRecord) -> ScatterRecord:
    """Scatter an incoming ray at a hit.

    Args:
        material: The material of the surface that was hit.
        ray_in: The incoming ray. Diffuse scattering ignores it.
        rec: The hit record of the intersection.

    Returns:
        A ScatterRecord; scattered == 0 for the NONE material.
    """
    result = make_no_scatter()
    if material.kind == int(MaterialKind.LAMBERTIAN):
        albedo = get_texture_colour(material.albedo, rec.uv, rec.point)
        direction, attenuation = scatter_lambertian(albedo, rec.normal)
        result = ScatterRecord(
            scattered=1,
            attenuation=attenuation,
            ray=Ray(origin=rec.point, direction=direction),
        )
    return result


# =============================================================================
# Host-side material descriptions
# =============================================================================


def _check_colour(name: str, colour) -> tuple[float, float, float]:
    """Validate an RGB colour for energy conservation."""
    if len(colour) != 3:
        raise MaterialError(f"{name} must have 3 components, got {len(colour)}")
    for i, component in enumerate(colour):
        if not 0.0 <= component <= 1.0:
            raise MaterialError(
                f"{name} component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return (float(colour[0]), float(colour[1]), float(colour[2]))


@dataclass(frozen=True)
class MaterialSpec:
    """Host-side description of a material, validated on construction.

    Use the ``none``, ``lambertian`` and ``checker`` constructors rather than
    building one directly.

    Attributes:
        kind: The MaterialKind.
        texture_kind: The TextureKind of the albedo.
        colour: Solid colour, or the checker's even-cell colour.
        odd_colour: The checker's odd-cell colour.
        checker_scale: World-space size of a checker cell.
    """

    kind: MaterialKind
    texture_kind: TextureKind = TextureKind.SOLID
    colour: tuple[float, float, float] = (0.0, 0.0, 0.0)
    odd_colour: tuple[float, float, float] = (0.0, 0.0, 0.0)
    checker_scale: float = 1.0

    def __post_init__(self) -> None:
        if not isinstance(self.kind, MaterialKind):
            raise MaterialError(f"Unknown material kind {self.kind!r}")
        if self.checker_scale <= 0.0:
            raise MaterialError(f"Checker scale must be positive, got {self.checker_scale}")
        object.__setattr__(self, "colour", _check_colour("Albedo", self.colour))
        object.__setattr__(self, "odd_colour", _check_colour("Odd albedo", self.odd_colour))

    @classmethod
    def none(cls) -> "MaterialSpec":
        """A material that never scatters."""
        return cls(kind=MaterialKind.NONE)

    @classmethod
    def lambertian(cls, albedo: tuple[float, float, float]) -> "MaterialSpec":
        """A diffuse material with a solid albedo.

        Raises:
            MaterialError: If any albedo component is outside [0, 1].
        """
        return cls(kind=MaterialKind.LAMBERTIAN, colour=albedo, odd_colour=albedo)

    @classmethod
    def checker(
        cls,
        even: tuple[float, float, float],
        odd: tuple[float, float, float],
        scale: float = 1.0,
    ) -> "MaterialSpec":
        """A diffuse material with a world-space checker albedo.

        Raises:
            MaterialError: If a colour is outside [0, 1] or scale <= 0.
        """
        return cls(
            kind=MaterialKind.LAMBERTIAN,
            texture_kind=TextureKind.CHECKER,
            colour=even,
            odd_colour=odd,
            checker_scale=scale,
        )
