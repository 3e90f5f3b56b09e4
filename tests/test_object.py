"""Unit tests for Object (shape + material).

Tests cover:
- check_object_collision uses the full forward ray
- check_object_collision_in respects the given interval
- scatter_object_ray delegates to the material
"""

import numpy as np
import taichi as ti


class TestObjectCollision:
    """Tests for object collision delegation."""

    def test_collision_over_forward_ray(self):
        """The unit-sphere scenario through an object: t=4, front face."""
        from tracecore.core.ray import Ray, vec3
        from tracecore.geometry.shape import sphere_shape
        from tracecore.geometry.sphere import make_sphere
        from tracecore.materials.material import lambertian_colour
        from tracecore.scene.object import check_object_collision, make_object

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())
        normal = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            obj = make_object(
                sphere_shape(make_sphere(vec3(0.0, 0.0, 0.0), 1.0)),
                lambertian_colour(vec3(0.5, 0.5, 0.5)),
            )
            ray = Ray(origin=vec3(0.0, 0.0, -5.0), direction=vec3(0.0, 0.0, 1.0))
            record = check_object_collision(obj, ray)
            hit[None] = record.hit
            t_val[None] = record.t
            normal[None] = record.normal

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 4.0) < 1e-5
        assert abs(normal[None][2] - (-1.0)) < 1e-5

    def test_collision_in_interval(self):
        """A narrower interval turns the same hit into a miss."""
        from tracecore.core.interval import make_interval
        from tracecore.core.ray import Ray, vec3
        from tracecore.geometry.shape import sphere_shape
        from tracecore.geometry.sphere import make_sphere
        from tracecore.materials.material import none_material
        from tracecore.scene.object import check_object_collision_in, make_object

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            obj = make_object(sphere_shape(make_sphere(vec3(0.0, 0.0, 0.0), 1.0)), none_material())
            ray = Ray(origin=vec3(0.0, 0.0, -5.0), direction=vec3(0.0, 0.0, 1.0))
            hit[None] = check_object_collision_in(obj, ray, make_interval(0.001, 3.0)).hit

        test_kernel()
        assert hit[None] == 0


class TestObjectScatter:
    """Tests for scatter_object_ray."""

    def test_scatter_after_hit(self):
        """Hit then scatter: albedo attenuation, ray from the hit point."""
        from tracecore.core.ray import Ray, vec3
        from tracecore.geometry.quad import make_quad
        from tracecore.geometry.shape import quad_shape
        from tracecore.materials.material import lambertian_colour
        from tracecore.scene.object import check_object_collision, make_object, scatter_object_ray

        scattered = ti.field(dtype=ti.i32, shape=())
        attenuation = ti.field(dtype=ti.math.vec3, shape=())
        origin = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            obj = make_object(
                quad_shape(make_quad(vec3(-1.0, 0.0, -1.0), vec3(0.0, 0.0, 2.0), vec3(2.0, 0.0, 0.0))),
                lambertian_colour(vec3(0.25, 0.5, 0.75)),
            )
            ray = Ray(origin=vec3(0.0, 3.0, 0.0), direction=vec3(0.0, -1.0, 0.0))
            record = check_object_collision(obj, ray)
            result = scatter_object_ray(obj, ray, record)
            scattered[None] = result.scattered
            attenuation[None] = result.attenuation
            origin[None] = result.ray.origin

        test_kernel()
        assert scattered[None] == 1
        np.testing.assert_array_equal(
            attenuation.to_numpy(), np.array([0.25, 0.5, 0.75], dtype=np.float32)
        )
        assert abs(origin[None][1]) < 1e-6

    def test_none_material_object(self):
        """An object with the NONE material is hit but never scatters."""
        from tracecore.core.ray import Ray, vec3
        from tracecore.geometry.shape import sphere_shape
        from tracecore.geometry.sphere import make_sphere
        from tracecore.materials.material import none_material
        from tracecore.scene.object import check_object_collision, make_object, scatter_object_ray

        hit = ti.field(dtype=ti.i32, shape=())
        scattered = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            obj = make_object(sphere_shape(make_sphere(vec3(0.0, 0.0, 0.0), 1.0)), none_material())
            ray = Ray(origin=vec3(0.0, 0.0, -5.0), direction=vec3(0.0, 0.0, 1.0))
            record = check_object_collision(obj, ray)
            hit[None] = record.hit
            scattered[None] = scatter_object_ray(obj, ray, record).scattered

        test_kernel()
        assert hit[None] == 1
        assert scattered[None] == 0
