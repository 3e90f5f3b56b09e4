"""Unit tests for axis-aligned bounding boxes.

Tests cover:
- Construction from two corners in either order
- Union of boxes and the empty sentinel
- Per-axis access and point containment
- Sphere and quad bounding boxes
"""

import taichi as ti


class TestAabbConstruction:
    """Tests for aabb_from_points."""

    def test_from_points_order_independent(self):
        """Swapping the corners gives the same box."""
        from tracecore.geometry.aabb import aabb_from_points

        lo_a = ti.field(dtype=ti.math.vec3, shape=())
        hi_a = ti.field(dtype=ti.math.vec3, shape=())
        lo_b = ti.field(dtype=ti.math.vec3, shape=())
        hi_b = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            p0 = ti.math.vec3(1.0, -2.0, 3.0)
            p1 = ti.math.vec3(-1.0, 4.0, 0.5)
            a = aabb_from_points(p0, p1)
            b = aabb_from_points(p1, p0)
            lo_a[None] = ti.math.vec3(a.x.min, a.y.min, a.z.min)
            hi_a[None] = ti.math.vec3(a.x.max, a.y.max, a.z.max)
            lo_b[None] = ti.math.vec3(b.x.min, b.y.min, b.z.min)
            hi_b[None] = ti.math.vec3(b.x.max, b.y.max, b.z.max)

        test_kernel()
        for i, expected in enumerate((-1.0, -2.0, 0.5)):
            assert abs(lo_a[None][i] - expected) < 1e-6
            assert abs(lo_b[None][i] - expected) < 1e-6
        for i, expected in enumerate((1.0, 4.0, 3.0)):
            assert abs(hi_a[None][i] - expected) < 1e-6
            assert abs(hi_b[None][i] - expected) < 1e-6

    def test_aabb_axis(self):
        """aabb_axis selects x, y, z by index."""
        from tracecore.geometry.aabb import aabb_axis, aabb_from_points

        mins = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            box = aabb_from_points(ti.math.vec3(1.0, 2.0, 3.0), ti.math.vec3(4.0, 5.0, 6.0))
            mins[None] = ti.math.vec3(
                aabb_axis(box, 0).min, aabb_axis(box, 1).min, aabb_axis(box, 2).min
            )

        test_kernel()
        m = mins[None]
        assert abs(m[0] - 1.0) < 1e-6
        assert abs(m[1] - 2.0) < 1e-6
        assert abs(m[2] - 3.0) < 1e-6


class TestAabbUnion:
    """Tests for aabb_union and the empty box."""

    def test_union_of_two_boxes(self):
        """Union spans both boxes."""
        from tracecore.geometry.aabb import aabb_from_points, aabb_union

        lo = ti.field(dtype=ti.math.vec3, shape=())
        hi = ti.field(dtype=ti.math.vec3, shape=())
        empty = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            a = aabb_from_points(ti.math.vec3(0.0, 0.0, 0.0), ti.math.vec3(1.0, 1.0, 1.0))
            b = aabb_from_points(ti.math.vec3(2.0, -1.0, 0.5), ti.math.vec3(3.0, 0.5, 0.6))
            box = aabb_union(a, b)
            lo[None] = ti.math.vec3(box.x.min, box.y.min, box.z.min)
            hi[None] = ti.math.vec3(box.x.max, box.y.max, box.z.max)
            empty[None] = box.empty

        test_kernel()
        assert empty[None] == 0
        for i, expected in enumerate((0.0, -1.0, 0.0)):
            assert abs(lo[None][i] - expected) < 1e-6
        for i, expected in enumerate((3.0, 1.0, 1.0)):
            assert abs(hi[None][i] - expected) < 1e-6

    def test_empty_is_union_identity(self):
        """Union with the empty box returns the other box unchanged."""
        from tracecore.geometry.aabb import aabb_from_points, aabb_union, empty_aabb

        left = ti.field(dtype=ti.math.vec3, shape=())
        right = ti.field(dtype=ti.math.vec3, shape=())
        both_empty = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            a = aabb_from_points(ti.math.vec3(-5.0, 1.0, 2.0), ti.math.vec3(-4.0, 3.0, 7.0))
            l_box = aabb_union(empty_aabb(), a)
            r_box = aabb_union(a, empty_aabb())
            left[None] = ti.math.vec3(l_box.x.min, l_box.y.min, l_box.z.max)
            right[None] = ti.math.vec3(r_box.x.min, r_box.y.min, r_box.z.max)
            both_empty[None] = aabb_union(empty_aabb(), empty_aabb()).empty

        test_kernel()
        for i, expected in enumerate((-5.0, 1.0, 7.0)):
            assert abs(left[None][i] - expected) < 1e-6
            assert abs(right[None][i] - expected) < 1e-6
        assert both_empty[None] == 1

    def test_empty_contains_nothing(self):
        """The empty box never contains a point, even the origin."""
        from tracecore.geometry.aabb import aabb_contains_point, empty_aabb

        result = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = aabb_contains_point(empty_aabb(), ti.math.vec3(0.0, 0.0, 0.0))

        test_kernel()
        assert result[None] == 0


class TestShapeBoxes:
    """Tests for the per-primitive bounding boxes."""

    def test_sphere_box(self):
        """Sphere box is center +- radius on every axis."""
        from tracecore.geometry.sphere import make_sphere, sphere_bounding_box

        lo = ti.field(dtype=ti.math.vec3, shape=())
        hi = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            box = sphere_bounding_box(make_sphere(ti.math.vec3(1.0, 2.0, 3.0), 0.5))
            lo[None] = ti.math.vec3(box.x.min, box.y.min, box.z.min)
            hi[None] = ti.math.vec3(box.x.max, box.y.max, box.z.max)

        test_kernel()
        for i, c in enumerate((1.0, 2.0, 3.0)):
            assert abs(lo[None][i] - (c - 0.5)) < 1e-6
            assert abs(hi[None][i] - (c + 0.5)) < 1e-6

    def test_quad_box_contains_all_corners(self):
        """A tilted quad's box contains Q, Q+u, Q+v and Q+u+v."""
        from tracecore.geometry.aabb import aabb_contains_point
        from tracecore.geometry.quad import make_quad, quad_bounding_box

        inside = ti.field(dtype=ti.i32, shape=4)

        @ti.kernel
        def test_kernel():
            q = ti.math.vec3(0.0, 1.0, -2.0)
            u = ti.math.vec3(2.0, 0.0, 1.0)
            v = ti.math.vec3(-1.0, 3.0, 0.0)
            box = quad_bounding_box(make_quad(q, u, v))
            inside[0] = aabb_contains_point(box, q)
            inside[1] = aabb_contains_point(box, q + u)
            inside[2] = aabb_contains_point(box, q + v)
            inside[3] = aabb_contains_point(box, q + u + v)

        test_kernel()
        assert all(inside[i] == 1 for i in range(4))

    def test_axis_aligned_quad_box_is_flat(self):
        """A quad in the y=0 plane gets a zero-thickness y extent, no padding."""
        from tracecore.geometry.quad import make_quad, quad_bounding_box

        lo = ti.field(dtype=ti.math.vec3, shape=())
        hi = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            quad = make_quad(
                ti.math.vec3(0.0, 0.0, 0.0),
                ti.math.vec3(1.0, 0.0, 0.0),
                ti.math.vec3(0.0, 0.0, 2.0),
            )
            box = quad_bounding_box(quad)
            lo[None] = ti.math.vec3(box.x.min, box.y.min, box.z.min)
            hi[None] = ti.math.vec3(box.x.max, box.y.max, box.z.max)

        test_kernel()
        assert abs(lo[None][0]) < 1e-6 and abs(hi[None][0] - 1.0) < 1e-6
        assert lo[None][1] == hi[None][1] == 0.0
        assert abs(lo[None][2]) < 1e-6 and abs(hi[None][2] - 2.0) < 1e-6
