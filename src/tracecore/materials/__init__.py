"""Materials module: textures and scattering policies.

Components:
    texture: Solid and checker textures sampled at a hit
    lambertian: Ideal diffuse scattering
    material: Material sum type, ScatterRecord and host-side MaterialSpec

Each material's scatter consumes a HitRecord and produces either an
attenuation colour with an outgoing ray, or nothing.
"""

from .lambertian import lambertian_direction, offset_direction, scatter_lambertian
from .material import (
    Material,
    MaterialKind,
    MaterialSpec,
    ScatterRecord,
    lambertian_colour,
    lambertian_material,
    make_no_scatter,
    none_material,
    scatter,
)
from .texture import Texture, TextureKind, checker_texture, get_texture_colour, solid_texture

__all__ = [
    "Texture",
    "TextureKind",
    "solid_texture",
    "checker_texture",
    "get_texture_colour",
    "lambertian_direction",
    "offset_direction",
    "scatter_lambertian",
    "Material",
    "MaterialKind",
    "MaterialSpec",
    "ScatterRecord",
    "none_material",
    "lambertian_material",
    "lambertian_colour",
    "make_no_scatter",
    "scatter",
]
