"""Geometry module for shape primitives and bounding boxes.

Components:
    hit_record: Intersection result and face orientation
    aabb: Axis-aligned bounding boxes (construction only)
    sphere: Sphere primitive with ray-sphere intersection
    quad: Parallelogram primitive with ray-quad intersection
    shape: Shape sum type dispatching to the primitives

All intersection routines are Taichi functions (@ti.func). Ray-shape
intersection follows the pattern:
    rec = check_collision(ray, shape, interval)

The primitives count their tests in tracecore.core.stats, so Taichi must be
initialised before this package is imported.
"""

from .aabb import AABB, aabb_axis, aabb_contains_point, aabb_from_points, aabb_union, empty_aabb
from .hit_record import HitRecord, face_normal, make_hit_record, make_miss_record
from .quad import Quad, hit_quad, make_quad, quad_area, quad_bounding_box, quad_frame, quad_normal
from .shape import (
    Shape,
    ShapeKind,
    check_collision,
    quad_shape,
    shape_bounding_box,
    shape_normal,
    sphere_shape,
)
from .sphere import (
    Sphere,
    hit_sphere,
    make_sphere,
    sphere_bounding_box,
    sphere_normal,
    sphere_theta,
    sphere_uv,
)

__all__ = [
    "HitRecord",
    "make_hit_record",
    "make_miss_record",
    "face_normal",
    "AABB",
    "empty_aabb",
    "aabb_from_points",
    "aabb_union",
    "aabb_axis",
    "aabb_contains_point",
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "sphere_normal",
    "sphere_theta",
    "sphere_uv",
    "sphere_bounding_box",
    "Quad",
    "hit_quad",
    "make_quad",
    "quad_frame",
    "quad_area",
    "quad_normal",
    "quad_bounding_box",
    "Shape",
    "ShapeKind",
    "sphere_shape",
    "quad_shape",
    "check_collision",
    "shape_normal",
    "shape_bounding_box",
]
