"""
Synthetic demo: sequential RANSAC extraction of lines, circles and an ellipse.

Points are drawn on a blank canvas with noise and uniform clutter, then
  1) lines are extracted one after another (inliers removed after each),
  2) circles are extracted from the remaining points,
  3) one ellipse is extracted from what is left.

Usage:
    python scripts/demo_ransac_curves.py [--out overlay.png] [--show] [--seed 17]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from curvecv import (
    GeometricCircle, GeometricEllipse, PointSet, RansacParams,
    circle_detector, ellipse_detector, line_detector,
)
from curvecv.utils import setup_logger
from curvecv.viz import draw_points, draw_result, show_and_save_overlay

W, H = 640, 480


def make_points(rng: np.random.Generator) -> np.ndarray:
    pts = []

    # Two lines
    x = rng.uniform(20, 620, size=150)
    pts.append(np.column_stack([x, 0.4 * x + 40 + rng.normal(0, 0.7, x.size)]))
    y = rng.uniform(20, 460, size=120)
    pts.append(np.column_stack([-0.2 * y + 500 + rng.normal(0, 0.7, y.size), y]))

    # Circle
    t = rng.uniform(0, 2 * np.pi, size=140)
    circle = GeometricCircle(200, 300, 80)
    pts.append(np.column_stack([circle.xc + circle.r * np.cos(t), circle.yc + circle.r * np.sin(t)])
               + rng.normal(0, 0.5, (t.size, 2)))

    # Ellipse
    ellipse = GeometricEllipse(90, 45, 420, 180, 0.5)
    t = rng.uniform(0, 2 * np.pi, size=160)
    u, v = ellipse.ra * np.cos(t), ellipse.rb * np.sin(t)
    ct, st = np.cos(ellipse.theta), np.sin(ellipse.theta)
    pts.append(np.column_stack([ellipse.xc + ct * u - st * v, ellipse.yc + st * u + ct * v])
               + rng.normal(0, 0.5, (t.size, 2)))

    # Clutter
    pts.append(rng.uniform([0, 0], [W, H], size=(100, 2)))

    return np.vstack(pts)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--out", type=Path, default=None, help="save the overlay image here")
    parser.add_argument("--show", action="store_true", help="display the overlay window")
    parser.add_argument("--seed", type=int, default=17)
    args = parser.parse_args()

    logger = setup_logger("curvecv", logging.INFO)

    rng = np.random.default_rng(args.seed)
    point_set = PointSet(make_points(rng))
    logger.info("generated %d points", point_set.n_total)

    canvas = np.zeros((H, W, 3), dtype=np.uint8)
    draw_points(canvas, point_set.points, (90, 90, 90), radius=1)

    lines = line_detector(RansacParams(max_iterations=1000, distance_threshold=2.0, min_support_count=80),
                          seed=args.seed).find_all(point_set, max_count=2)
    circles = circle_detector(RansacParams(max_iterations=1000, distance_threshold=2.0, min_support_count=70),
                              seed=args.seed).find_all(point_set, max_count=1)
    ellipses = ellipse_detector(RansacParams(max_iterations=2000, distance_threshold=2.0, min_support_count=80),
                                seed=args.seed).find_all(point_set, max_count=1)

    for res in lines:
        draw_result(canvas, res, color=(0, 0, 255))
    for res in circles:
        draw_result(canvas, res, color=(0, 255, 0))
    for res in ellipses:
        draw_result(canvas, res, color=(255, 0, 0))

    for name, results in (("line", lines), ("circle", circles), ("ellipse", ellipses)):
        for res in results:
            print(f"{name}: {res.primitive_final}  score={res.score}  iterations={res.iterations}")
    print(f"unclaimed points: {point_set.n_present} / {point_set.n_total}")

    if args.out is not None or args.show:
        show_and_save_overlay(canvas, output_path=args.out, show=args.show)


if __name__ == "__main__":
    main()
