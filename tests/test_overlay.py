"""Tests for overlay drawing and point extraction from images."""

import numpy as np
import pytest

from curvecv.geometry import AlgebraicLine, GeometricCircle, GeometricEllipse
from curvecv.ransac import PointSet, RansacParams, circle_detector
from curvecv.viz import (
    draw_circle, draw_ellipse, draw_line, draw_primitive, draw_result,
    points_from_binary_image, show_and_save_overlay, to_bgr,
)


class TestPointExtraction:
    """Test points_from_binary_image."""

    def test_nonzero_pixels_become_points(self):
        mask = np.zeros((10, 20), dtype=np.uint8)
        mask[3, 7] = 255
        mask[9, 0] = 1
        ps = points_from_binary_image(mask)
        assert ps.n_present == 2
        assert {tuple(p) for p in ps.points.tolist()} == {(7.0, 3.0), (0.0, 9.0)}

    def test_empty_mask(self):
        ps = points_from_binary_image(np.zeros((5, 5), dtype=np.uint8))
        assert ps.n_total == 0

    def test_rejects_color_image(self):
        with pytest.raises(ValueError):
            points_from_binary_image(np.zeros((5, 5, 3), dtype=np.uint8))


class TestDrawing:
    """Test primitive drawing on BGR canvases."""

    def test_to_bgr(self):
        gray = np.zeros((4, 6), dtype=np.uint8)
        assert to_bgr(gray).shape == (4, 6, 3)
        color = np.zeros((4, 6, 3), dtype=np.uint8)
        out = to_bgr(color)
        assert out is not color

    def test_draw_line(self):
        img = np.zeros((100, 100, 3), dtype=np.uint8)
        draw_line(img, AlgebraicLine.from_points((0, 50), (10, 50)), (0, 0, 255))
        assert img[50, 10, 2] > 0
        assert img[50, 90, 2] > 0
        assert img[10, 50].sum() == 0

    def test_draw_circle(self):
        img = np.zeros((100, 100, 3), dtype=np.uint8)
        draw_circle(img, GeometricCircle(50, 50, 30), (0, 255, 0))
        assert img.sum() > 0
        assert img[50, 50].sum() == 0

    def test_draw_ellipse(self):
        img = np.zeros((100, 100, 3), dtype=np.uint8)
        draw_ellipse(img, GeometricEllipse(40, 20, 50, 50, 0.4), (255, 0, 0))
        assert img[..., 0].sum() > 0
        assert img[50, 50].sum() == 0

    def test_draw_unknown_primitive(self):
        img = np.zeros((10, 10, 3), dtype=np.uint8)
        with pytest.raises(TypeError):
            draw_primitive(img, object(), (255, 255, 255))

    def test_draw_result(self):
        rng = np.random.default_rng(0)
        t = rng.uniform(0, 2 * np.pi, 100)
        pts = np.column_stack([60 + 40 * np.cos(t), 60 + 40 * np.sin(t)])
        res = circle_detector(RansacParams(max_iterations=100, min_support_count=50), seed=0).find_next(PointSet(pts))
        img = np.zeros((120, 120, 3), dtype=np.uint8)
        out = draw_result(img, res, show_initial=True)
        assert out is img
        assert img.sum() > 0

    def test_save_overlay(self, tmp_path):
        img = np.zeros((20, 20, 3), dtype=np.uint8)
        path = tmp_path / "out" / "overlay.png"
        show_and_save_overlay(img, output_path=path, show=False)
        assert path.exists()
