"""Scene module: renderer-facing objects and the world registry.

Components:
    object: Object pairing a Shape with a Material
    world: Object storage in Taichi fields and closest-hit queries

Scene data is organized for efficient GPU access: a structure-of-arrays
layout with one slot per object, validated on the host when added.
"""

from .object import (
    Object,
    check_object_collision,
    check_object_collision_in,
    make_object,
    scatter_object_ray,
)
from .world import (
    MAX_OBJECTS,
    ObjectInfo,
    WorldHit,
    add_quad_object,
    add_sphere_object,
    clear_world,
    get_object,
    get_object_count,
    get_object_info,
    intersect_world,
    scatter_world_hit,
    world_bounding_box,
)

__all__ = [
    "Object",
    "make_object",
    "check_object_collision",
    "check_object_collision_in",
    "scatter_object_ray",
    "MAX_OBJECTS",
    "ObjectInfo",
    "WorldHit",
    "add_sphere_object",
    "add_quad_object",
    "clear_world",
    "get_object",
    "get_object_count",
    "get_object_info",
    "intersect_world",
    "scatter_world_hit",
    "world_bounding_box",
]
