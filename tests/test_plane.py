"""Unit tests for plane intersection.

Tests cover:
- Ray hitting plane from the front and from behind
- Parallel rays
- Plane behind the ray origin
"""

import taichi as ti


def _run_hit_plane(origin, direction, point, plane_normal):
    """Run hit_plane in a kernel and return (hit, t, normal)."""
    from rray.geometry.plane import Plane, hit_plane, vec3
    from rray.geometry.sphere import HIT_EPSILON, MAX_DISTANCE

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    normal = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(o: vec3, d: vec3, p: vec3, pn: vec3):
        plane = Plane(point=p, normal=pn)
        record = hit_plane(o, d, plane, HIT_EPSILON, MAX_DISTANCE)
        hit[None] = record.hit
        t_val[None] = record.t
        normal[None] = record.normal

    test_kernel(vec3(*origin), vec3(*direction), vec3(*point), vec3(*plane_normal))
    n = normal[None]
    return hit[None], t_val[None], (n[0], n[1], n[2])


class TestPlaneBasics:
    """Tests for Plane dataclass."""

    def test_make_plane(self):
        """Test make_plane stores point and normal."""
        from rray.geometry.plane import make_plane, vec3

        point_result = ti.field(dtype=ti.math.vec3, shape=())
        normal_result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            plane = make_plane(vec3(0.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
            point_result[None] = plane.point
            normal_result[None] = plane.normal

        test_kernel()
        assert abs(point_result[None][1] + 1.0) < 1e-6
        assert abs(normal_result[None][1] - 1.0) < 1e-6


class TestPlaneIntersection:
    """Tests for ray-plane intersection."""

    def test_hit_plane_from_front(self):
        """Test ray pointing down onto a floor."""
        hit, t, n = _run_hit_plane((0.0, 0.0, 0.0), (0.0, -1.0, 1.0), (0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 1
        assert abs(t - 1.0) < 1e-5
        assert abs(n[1] - 1.0) < 1e-6

    def test_hit_plane_from_behind_keeps_normal(self):
        """Test the stored normal is reported even when hit from behind."""
        hit, t, n = _run_hit_plane((0.0, -2.0, 0.0), (0.0, 1.0, 0.0), (0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 1
        assert abs(t - 1.0) < 1e-5
        assert abs(n[1] - 1.0) < 1e-6

    def test_hit_plane_parallel(self):
        """Test ray parallel to the plane misses."""
        hit, _, _ = _run_hit_plane((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 0

    def test_hit_plane_behind_origin(self):
        """Test plane behind the ray is not hit."""
        hit, _, _ = _run_hit_plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 0

    def test_hit_plane_zero_direction(self):
        """Test zero direction misses."""
        hit, _, _ = _run_hit_plane((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 0
