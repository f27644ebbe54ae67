"""Tests for primitive types and their distance functions."""

import math

import numpy as np
import pytest

from curvecv.geometry import (
    AlgebraicCircle, AlgebraicEllipse, AlgebraicLine, GeometricCircle, GeometricEllipse,
)


class TestAlgebraicLine:
    """Test AlgebraicLine."""

    def test_from_points_is_normalized(self):
        line = AlgebraicLine.from_points((30, 10), (200, 100))
        assert math.hypot(line.a, line.b) == pytest.approx(1.0)
        assert line.distance((30, 10)) == pytest.approx(0.0, abs=1e-12)
        assert line.distance((200, 100)) == pytest.approx(0.0, abs=1e-12)

    def test_signed_distance(self):
        """Distance is signed: opposite sides give opposite signs."""
        line = AlgebraicLine.from_points((0, 0), (1, 0))
        d = line.distance(np.array([[0.0, 2.0], [5.0, -2.0]]))
        assert d[0] == pytest.approx(-d[1])
        assert abs(d[0]) == pytest.approx(2.0)

    def test_coincident_points(self):
        assert AlgebraicLine.from_points((3, 4), (3, 4)) is None
        assert AlgebraicLine.from_coefficients(0.0, 0.0, 1.0) is None

    def test_slope_intercept(self):
        line = AlgebraicLine.from_points((0, 3), (10, 23))
        k, d = line.slope_intercept()
        assert k == pytest.approx(2.0)
        assert d == pytest.approx(3.0)
        assert AlgebraicLine.from_points((5, 0), (5, 10)).slope_intercept() is None

    def test_closest_point(self):
        line = AlgebraicLine.from_points((0, 0), (1, 1))
        np.testing.assert_allclose(line.closest_point((2.0, 0.0)), [1.0, 1.0], atol=1e-12)


class TestGeometricCircle:
    """Test GeometricCircle."""

    def test_distance_is_unsigned_radial(self):
        circle = GeometricCircle(50, 50, 30)
        pts = np.array([[50, 85], [50, 50], [80, 50]], dtype=float)
        np.testing.assert_allclose(circle.distance(pts), [5.0, 30.0, 0.0], atol=1e-12)

    def test_from_algebraic(self):
        circle = GeometricCircle(3, -2, 5)
        back = GeometricCircle.from_algebraic(circle.to_algebraic())
        assert back.xc == pytest.approx(3)
        assert back.yc == pytest.approx(-2)
        assert back.r == pytest.approx(5)

    def test_from_algebraic_degenerate(self):
        """A == 0 is a straight line, not a circle."""
        assert GeometricCircle.from_algebraic(AlgebraicCircle(0.0, 1.0, -1.0, 0.0)) is None
        # imaginary radius: x^2 + y^2 + 1 = 0
        assert GeometricCircle.from_algebraic(AlgebraicCircle(1.0, 0.0, 0.0, 1.0)) is None


class TestGeometricEllipse:
    """Test GeometricEllipse."""

    def test_major_axis_normalization(self):
        """ra is always the major axis; theta is kept in [0, pi)."""
        e = GeometricEllipse(3, 5, 0, 0, 0.0)
        assert (e.ra, e.rb) == (5.0, 3.0)
        assert e.theta == pytest.approx(math.pi / 2)
        e2 = GeometricEllipse(5, 3, 0, 0, -0.25)
        assert e2.theta == pytest.approx(math.pi - 0.25)

    def test_algebraic_conversion(self):
        e = GeometricEllipse(60, 25, 100, 80, 0.7)
        back = GeometricEllipse.from_algebraic(e.to_algebraic())
        np.testing.assert_allclose(back.parameters(), e.parameters(), atol=1e-9)

    def test_conversion_is_sign_invariant(self):
        """Scaling the conic by -1 describes the same ellipse."""
        ae = GeometricEllipse(2, 1, 0, 0, 0.0).to_algebraic()
        neg = AlgebraicEllipse(*(-v for v in (ae.A, ae.B, ae.C, ae.D, ae.E, ae.F)))
        back = GeometricEllipse.from_algebraic(neg)
        assert back.ra == pytest.approx(2.0)
        assert back.rb == pytest.approx(1.0)
        assert back.theta == pytest.approx(0.0, abs=1e-12)

    def test_non_ellipse_conics(self):
        # hyperbola x*y - 1 = 0
        assert GeometricEllipse.from_algebraic(AlgebraicEllipse(0, 1, 0, 0, 0, -1)) is None
        # imaginary ellipse x^2 + y^2 + 1 = 0
        assert GeometricEllipse.from_algebraic(AlgebraicEllipse(1, 0, 1, 0, 0, 1)) is None

    def test_distance_axis_aligned(self):
        e = GeometricEllipse(5, 3, 0, 0, 0.0)
        pts = np.array([[0, 10], [10, 0], [0, 0], [-8, 0], [0, -1]], dtype=float)
        np.testing.assert_allclose(e.distance(pts), [7.0, 5.0, 3.0, 3.0, 2.0], atol=1e-9)

    def test_distance_on_outline_is_zero(self):
        e = GeometricEllipse(40, 15, 10, -5, 1.1)
        t = np.linspace(0, 2 * np.pi, 37)
        u, v = e.ra * np.cos(t), e.rb * np.sin(t)
        ct, st = math.cos(e.theta), math.sin(e.theta)
        pts = np.column_stack([e.xc + ct * u - st * v, e.yc + st * u + ct * v])
        np.testing.assert_allclose(e.distance(pts), 0.0, atol=1e-8)

    def test_distance_matches_circle(self):
        """An ellipse with equal axes measures the same distance as a circle."""
        rng = np.random.default_rng(0)
        pts = rng.uniform(-50, 50, size=(100, 2))
        e = GeometricEllipse(20, 20, 3, 4, 0.3)
        c = GeometricCircle(3, 4, 20)
        np.testing.assert_allclose(e.distance(pts), c.distance(pts), atol=1e-8)

    def test_closest_point_is_on_ellipse(self):
        rng = np.random.default_rng(1)
        pts = rng.uniform(-30, 30, size=(50, 2))
        e = GeometricEllipse(12, 5, 2, -1, 0.4)
        proj = e.closest_point(pts)
        np.testing.assert_allclose(e.distance(proj), 0.0, atol=1e-8)
        # distance equals the length of the projection vector
        np.testing.assert_allclose(np.linalg.norm(proj - pts, axis=1), e.distance(pts), atol=1e-8)

    def test_single_point_query(self):
        e = GeometricEllipse(5, 3, 0, 0, 0.0)
        assert float(e.distance((0.0, 10.0))) == pytest.approx(7.0)
