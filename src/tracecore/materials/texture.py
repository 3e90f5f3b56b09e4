"""Textures evaluated at a surface hit.

Materials do not read a colour directly; they ask their albedo texture for
the colour at the hit's (uv, point). Two kinds exist:

- SOLID: the same colour everywhere.
- CHECKER: a 3D checkerboard in world space. Cells are 1 / inv_scale wide;
  the cell index sum floor(x*s) + floor(y*s) + floor(z*s) picks ``colour``
  when even and ``odd_colour`` when odd.
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

vec3 = tm.vec3
vec2 = tm.vec2


class TextureKind(IntEnum):
    """Enumeration of supported texture kinds."""

    SOLID = 0
    CHECKER = 1


@ti.dataclass
class Texture:
    """A colour source sampled at surface hits.

    Attributes:
        kind: The TextureKind.
        colour: The solid colour, or the checker's even-cell colour.
        odd_colour: The checker's odd-cell colour (unused for SOLID).
        inv_scale: Reciprocal of the checker cell size (unused for SOLID).
    """

    kind: ti.i32
    colour: vec3
    odd_colour: vec3
    inv_scale: ti.f32


@ti.func
def solid_texture(colour: vec3) -> Texture:
    return Texture(kind=int(TextureKind.SOLID), colour=colour, odd_colour=colour, inv_scale=1.0)


@ti.func
def checker_texture(scale: ti.f32, even: vec3, odd: vec3) -> Texture:
    """Create a checker texture with cells of the given world-space size."""
    return Texture(kind=int(TextureKind.CHECKER), colour=even, odd_colour=odd, inv_scale=1.0 / scale)


@ti.func
def get_texture_colour(texture: Texture, uv: vec2, point: vec3) -> vec3:
    """Evaluate a texture at a surface hit.

    Args:
        texture: The texture to sample.
        uv: Surface coordinates of the hit.
        point: World-space position of the hit.

    Returns:
        The RGB colour at the hit.
    """
    result = texture.colour
    if texture.kind == int(TextureKind.CHECKER):
        cell = ti.cast(ti.floor(texture.inv_scale * point), ti.i32)
        if (cell.x + cell.y + cell.z) % 2 != 0:
            result = texture.odd_colour
    return result
