"""
投影面积与接受度的单元测试
"""

import math

import numpy as np
import pytest
from scipy import integrate

from neutrino_event_generator import (
    Cylinder,
    Cuboid,
    CylinderSurface,
    Sphere,
    projected_area,
    maximum_proj_area,
    acceptance,
)
from neutrino_event_generator.testing import estimate_acceptance_monte_carlo


class TestProjectedArea:
    """测试投影面积"""

    cyl = Cylinder((0, 0, 0), 10.0, 5.0)

    def test_limits(self):
        """测试正上方与侧面视角"""
        assert projected_area(self.cyl, 1.0) == pytest.approx(math.pi * 25.0)
        assert projected_area(self.cyl, -1.0) == pytest.approx(math.pi * 25.0)
        assert projected_area(self.cyl, 0.0) == pytest.approx(2 * 5.0 * 10.0)

    def test_direction_vector(self):
        """测试以方向向量为参数"""
        assert projected_area(self.cyl, np.array([0.0, 0.0, -2.0])) == pytest.approx(math.pi * 25.0)
        assert projected_area(self.cyl, np.array([3.0, 0.0, 0.0])) == pytest.approx(100.0)
        direction = np.array([1.0, 1.0, 1.0])
        assert projected_area(self.cyl, direction) == pytest.approx(projected_area(self.cyl, 1 / math.sqrt(3)))

    def test_surface_and_volume_agree(self):
        """测试表面与体积给出相同结果"""
        surface = CylinderSurface.from_volume(self.cyl)
        for c in (-0.7, 0.1, 0.9):
            assert projected_area(surface, c) == projected_area(self.cyl, c)

    def test_maximum(self):
        """测试最大投影面积"""
        cos_grid = np.linspace(-1.0, 1.0, 200001)
        areas = np.array([projected_area(self.cyl, c) for c in cos_grid])
        max_area = maximum_proj_area(self.cyl)
        assert np.all(areas <= max_area * (1 + 1e-12))
        assert max_area == pytest.approx(areas.max(), rel=1e-6)

    def test_sphere(self):
        """测试球体投影面积"""
        sphere = Sphere((0, 0, 0), 2.0)
        assert projected_area(sphere, 0.3) == pytest.approx(4 * math.pi)
        assert maximum_proj_area(sphere) == pytest.approx(4 * math.pi)

    def test_unsupported_shape(self):
        """测试不支持的形状"""
        with pytest.raises(NotImplementedError):
            projected_area(Cuboid((0, 0, 0), 1, 1, 1), 0.5)


class TestAcceptance:
    """测试接受度"""

    cyl = Cylinder((0, 0, 0), 10.0, 5.0)

    def test_full_sphere_closed_form(self):
        """测试全立体角闭式解"""
        r, h = 5.0, 10.0
        expected = 2 * math.pi ** 2 * r ** 2 + 2 * math.pi ** 2 * r * h
        assert acceptance(self.cyl) == pytest.approx(expected)

    def test_matches_numerical_integration(self):
        """测试与数值积分一致"""
        for cos_min, cos_max in [(-1.0, 1.0), (-0.3, 0.7), (0.2, 0.25), (-1.0, 0.0)]:
            integral, _ = integrate.quad(lambda c: projected_area(self.cyl, c), cos_min, cos_max)
            assert acceptance(self.cyl, cos_min, cos_max) == pytest.approx(2 * math.pi * integral, rel=1e-6)

    def test_matches_monte_carlo(self):
        """测试与蒙特卡洛估计一致"""
        rng = np.random.default_rng(21)
        estimate, err = estimate_acceptance_monte_carlo(self.cyl, 20000, rng)
        assert abs(estimate - acceptance(self.cyl)) < 5 * err

    def test_additive_and_symmetric(self):
        """测试可加性与上下对称"""
        lower = acceptance(self.cyl, -1.0, 0.0)
        upper = acceptance(self.cyl, 0.0, 1.0)
        assert lower == pytest.approx(upper)
        assert lower + upper == pytest.approx(acceptance(self.cyl))

    def test_degenerate_band(self):
        """测试零宽度区间"""
        assert acceptance(self.cyl, 0.4, 0.4) == pytest.approx(0.0, abs=1e-12)

    def test_invalid_band(self):
        """测试非法区间"""
        with pytest.raises(ValueError):
            acceptance(self.cyl, 0.5, -0.5)
        with pytest.raises(ValueError):
            acceptance(self.cyl, -1.5, 0.5)

    def test_sphere(self):
        """测试球体接受度"""
        sphere = Sphere((0, 0, 0), 2.0)
        assert acceptance(sphere) == pytest.approx(4 * math.pi * math.pi * 4.0)
        assert acceptance(sphere, 0.0, 0.5) == pytest.approx(acceptance(sphere) / 4)
