"""
射线与圆柱/球面求交的单元测试
"""

import math

import numpy as np
import pytest

from neutrino_event_generator import (
    Cylinder,
    Cuboid,
    CylinderSurface,
    SphereSurface,
    Intersection,
    Particle,
    get_intersection,
    chord_length,
)


def on_cylinder(surface, point, tol=1e-6):
    rel = np.asarray(point) - surface.center
    r = math.hypot(rel[0], rel[1])
    half = surface.height / 2
    on_cap = abs(abs(rel[2]) - half) < tol and r <= surface.radius + tol
    on_mantle = abs(r - surface.radius) < tol and abs(rel[2]) <= half + tol
    return on_cap or on_mantle


class TestIntersectionType:
    """测试交点数据类"""

    def test_order_is_normalised(self):
        """测试入口/出口排序"""
        isec = Intersection(3.0, 1.0)
        assert isec.entry == 1.0
        assert isec.exit == 3.0
        assert isec.is_hit

    def test_miss(self):
        """测试未命中"""
        isec = Intersection.miss()
        assert isec.entry is None and isec.exit is None
        assert not isec.is_hit

    def test_half_miss_rejected(self):
        """测试只有一个端点的情况"""
        with pytest.raises(ValueError):
            Intersection(1.0, None)


class TestCylinderIntersection:
    """测试圆柱求交"""

    surface = CylinderSurface((0, 0, 0), 10.0, 5.0)

    def test_vertical_through_center(self):
        """测试竖直射线穿过中心"""
        isec = get_intersection(self.surface, np.zeros(3), np.array([0.0, 0.0, 1.0]))
        assert isec.entry == pytest.approx(-5.0)
        assert isec.exit == pytest.approx(5.0)

    def test_vertical_outside_radius(self):
        """测试半径外的竖直射线"""
        isec = get_intersection(self.surface, np.array([20.0, 0.0, 0.0]), np.array([0.0, 0.0, 1.0]))
        assert not isec.is_hit

    def test_horizontal(self):
        """测试水平射线只与侧面相交"""
        isec = get_intersection(self.surface, np.array([-20.0, 0.0, 0.0]), np.array([1.0, 0.0, 0.0]))
        assert isec.entry == pytest.approx(15.0)
        assert isec.exit == pytest.approx(25.0)

    def test_horizontal_above(self):
        """测试端盖上方的水平射线"""
        isec = get_intersection(self.surface, np.array([-20.0, 0.0, 10.0]), np.array([1.0, 0.0, 0.0]))
        assert not isec.is_hit

    def test_oblique_miss(self):
        """测试斜射线未命中"""
        direction = np.array([1.0, 0.0, 1.0]) / math.sqrt(2)
        isec = get_intersection(self.surface, np.array([0.0, 20.0, 0.0]), direction)
        assert not isec.is_hit
        assert chord_length(self.surface, np.array([0.0, 20.0, 0.0]), direction) == 0.0

    def test_line_behind_origin(self):
        """测试交点位于起点之后（负距离）"""
        isec = get_intersection(self.surface, np.array([0.0, 0.0, 20.0]), np.array([0.0, 0.0, 1.0]))
        assert isec.entry == pytest.approx(-25.0)
        assert isec.exit == pytest.approx(-15.0)

    def test_endpoints_on_surface(self):
        """测试随机射线的交点都在表面上"""
        rng = np.random.default_rng(11)
        surface = CylinderSurface((3, -2, 1), 10.0, 5.0)
        volume = surface.to_volume()
        for _ in range(500):
            start = volume.sample(rng)
            direction = rng.normal(size=3)
            direction /= np.linalg.norm(direction)
            isec = get_intersection(surface, start, direction)
            assert isec.is_hit
            assert isec.entry <= 0.0 <= isec.exit
            assert on_cylinder(surface, start + isec.entry * direction)
            assert on_cylinder(surface, start + isec.exit * direction)

    def test_volume_and_particle_arguments(self):
        """测试以体积和粒子为参数"""
        particle = Particle([0.0, 0.0, 0.0], [0.0, 0.0, 1.0], 0.0, 1.0, 0.0, 13)
        isec = get_intersection(Cylinder((0, 0, 0), 10.0, 5.0), particle)
        assert isec == Intersection(-5.0, 5.0)

    def test_chord_length(self):
        """测试弦长"""
        assert chord_length(self.surface, np.zeros(3), np.array([0.0, 0.0, -1.0])) == pytest.approx(10.0)
        assert chord_length(self.surface, np.zeros(3), np.array([0.0, 1.0, 0.0])) == pytest.approx(10.0)

    def test_missing_direction(self):
        """测试缺少方向"""
        with pytest.raises(ValueError):
            get_intersection(self.surface, np.zeros(3))
        with pytest.raises(ValueError):
            get_intersection(self.surface, np.zeros(3), np.zeros(3))

    def test_unsupported_shape(self):
        """测试不支持的形状"""
        with pytest.raises(NotImplementedError):
            get_intersection(Cuboid((0, 0, 0), 1, 1, 1), np.zeros(3), np.array([0.0, 0.0, 1.0]))


class TestSphereIntersection:
    """测试球面求交"""

    def test_axis_ray(self):
        """测试沿轴射线"""
        surface = SphereSurface((0, 0, 0), 2.0)
        isec = get_intersection(surface, np.array([-10.0, 0.0, 0.0]), np.array([1.0, 0.0, 0.0]))
        assert isec.entry == pytest.approx(8.0)
        assert isec.exit == pytest.approx(12.0)

    def test_miss(self):
        """测试未命中"""
        surface = SphereSurface((0, 0, 0), 2.0)
        isec = get_intersection(surface, np.array([-10.0, 3.0, 0.0]), np.array([1.0, 0.0, 0.0]))
        assert not isec.is_hit

    def test_endpoints_on_surface(self):
        """测试交点在球面上"""
        rng = np.random.default_rng(12)
        surface = SphereSurface((1, 1, 1), 3.0)
        for _ in range(200):
            start = surface.to_volume().sample(rng)
            direction = rng.normal(size=3)
            direction /= np.linalg.norm(direction)
            isec = get_intersection(surface, start, direction)
            for t in (isec.entry, isec.exit):
                assert np.linalg.norm(start + t * direction - surface.center) == pytest.approx(3.0)
