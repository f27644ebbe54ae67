"""
Overlay utilities for detected primitives.
  - turning binary edge images into point sets
  - drawing lines / circles / ellipses / points on BGR images
  - optionally showing or saving the overlay
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Tuple

import cv2
import numpy as np

from ..geometry.circle import GeometricCircle
from ..geometry.ellipse import GeometricEllipse
from ..geometry.line import AlgebraicLine
from ..ransac.point_set import PointSet
from ..types import Points2D, RansacResult

Color = Tuple[int, int, int]


# Point extraction
def points_from_binary_image(mask: np.ndarray) -> PointSet:
    """
    Collect the coordinates of all nonzero pixels as a PointSet.

    mask:
      (H,W) image; any nonzero pixel (e.g. an edge pixel) becomes a point (x=u, y=v).
    """
    if mask is None or mask.ndim != 2:
        raise ValueError("points_from_binary_image expects a single-channel (H,W) image.")
    vs, us = np.nonzero(mask)
    pts = np.column_stack([us, vs]).astype(np.float64)
    return PointSet(pts.reshape(-1, 2))


def to_bgr(img: np.ndarray) -> np.ndarray:
    """Return a BGR copy of a grayscale or BGR image, for drawing in color."""
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    return img.copy()


# Primitive drawing
def draw_line(img: np.ndarray, line: AlgebraicLine, color: Color = (0, 0, 255), thickness: int = 1) -> np.ndarray:
    """
    Draw an (infinite) line across the image.

    The foot point of the origin is moved far out in both directions along the
    line; cv2.line clips the segment to the image.
    """
    h, w = img.shape[:2]
    extent = 2.0 * (w + h)
    x0, y0 = -line.a * line.c, -line.b * line.c
    dx, dy = -line.b, line.a
    p1 = (int(round(x0 - extent * dx)), int(round(y0 - extent * dy)))
    p2 = (int(round(x0 + extent * dx)), int(round(y0 + extent * dy)))
    cv2.line(img, p1, p2, color, thickness, cv2.LINE_AA)
    return img


def draw_circle(img: np.ndarray, circle: GeometricCircle, color: Color = (0, 255, 0), thickness: int = 1) -> np.ndarray:
    center = (int(round(circle.xc)), int(round(circle.yc)))
    cv2.circle(img, center, int(round(circle.r)), color, thickness, cv2.LINE_AA)
    return img


def draw_ellipse(img: np.ndarray, ellipse: GeometricEllipse, color: Color = (255, 0, 0), thickness: int = 1) -> np.ndarray:
    center = (int(round(ellipse.xc)), int(round(ellipse.yc)))
    axes = (int(round(ellipse.ra)), int(round(ellipse.rb)))
    cv2.ellipse(img, center, axes, math.degrees(ellipse.theta), 0.0, 360.0, color, thickness, cv2.LINE_AA)
    return img


def draw_points(img: np.ndarray, pts: Points2D, color: Color = (0, 255, 255), radius: int = 1) -> np.ndarray:
    for x, y in np.asarray(pts, dtype=np.float64).reshape(-1, 2):
        cv2.circle(img, (int(round(x)), int(round(y))), radius, color, -1)
    return img


def draw_primitive(img: np.ndarray, primitive: object, color: Color, thickness: int = 1) -> np.ndarray:
    if isinstance(primitive, AlgebraicLine):
        return draw_line(img, primitive, color, thickness)
    if isinstance(primitive, GeometricCircle):
        return draw_circle(img, primitive, color, thickness)
    if isinstance(primitive, GeometricEllipse):
        return draw_ellipse(img, primitive, color, thickness)
    raise TypeError(f"cannot draw primitive of type {type(primitive).__name__}")


def draw_result(
        img: np.ndarray,
        result: RansacResult,
        *,
        color: Color = (0, 0, 255),
        inlier_color: Color = (0, 255, 255),
        draw_color: Color = (255, 0, 255),
        show_initial: bool = False,
) -> np.ndarray:
    """
    Draw one RANSAC result: inliers, the winning draw and the final primitive.
    If show_initial, the primitive from the minimal fit is drawn as well (gray).
    """
    draw_points(img, result.inliers, inlier_color, radius=1)
    if show_initial:
        draw_primitive(img, result.primitive_init, (128, 128, 128), 1)
    draw_primitive(img, result.primitive_final, color, 2)
    draw_points(img, result.draw, draw_color, radius=3)
    return img


def show_and_save_overlay(
        overlay_bgr: np.ndarray,
        *,
        output_path: Optional[Path] = None,
        title: str = "RANSAC",
        show: bool = True,
) -> np.ndarray:
    """
    Display an overlay and wait for a keypress, and/or save it as an image.
    """
    if show:
        cv2.imshow(title, overlay_bgr)
        cv2.waitKey(0)
        cv2.destroyWindow(title)

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        cv2.imwrite(str(output_path), overlay_bgr)

    return overlay_bgr
