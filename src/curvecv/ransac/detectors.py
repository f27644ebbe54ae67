# Andy Zhao
"""
Ready-made RANSAC detectors for lines, circles and ellipses.

Each binds the generic RansacDetector to a fitter (draw size, minimal fit,
final fit, draw precondition) and to its default parameters.
"""

from __future__ import annotations

from typing import Optional

from ..fitting.circle import CircleFitType
from ..geometry.circle import GeometricCircle
from ..geometry.ellipse import GeometricEllipse
from ..geometry.line import AlgebraicLine
from .circle_fitter import CircleFitter
from .core import RansacDetector, RansacParams
from .ellipse_fitter import EllipseFitter
from .line_fitter import LineFitter

DEFAULT_LINE_PARAMS = RansacParams(max_iterations=1000, distance_threshold=2.0, min_support_count=100)
DEFAULT_CIRCLE_PARAMS = RansacParams(max_iterations=1000, distance_threshold=2.0, min_support_count=70)
DEFAULT_ELLIPSE_PARAMS = RansacParams(max_iterations=1000, distance_threshold=2.0, min_support_count=100)


def line_detector(
    params: Optional[RansacParams] = None,
    *,
    min_pair_distance: float = 25.0,
    seed: Optional[int] = None,
) -> RansacDetector[AlgebraicLine]:
    """Line detector: draws 2 points at least min_pair_distance apart."""
    return RansacDetector(
        LineFitter(min_pair_distance=min_pair_distance),
        params if params is not None else DEFAULT_LINE_PARAMS,
        seed=seed,
    )


def circle_detector(
    params: Optional[RansacParams] = None,
    *,
    final_fit: CircleFitType | str = CircleFitType.HYPER,
    seed: Optional[int] = None,
) -> RansacDetector[GeometricCircle]:
    """Circle detector: circumcircle of 3 points, refit with an algebraic fit."""
    return RansacDetector(
        CircleFitter(final_fit=CircleFitType(final_fit)),
        params if params is not None else DEFAULT_CIRCLE_PARAMS,
        seed=seed,
    )


def ellipse_detector(
    params: Optional[RansacParams] = None,
    *,
    seed: Optional[int] = None,
) -> RansacDetector[GeometricEllipse]:
    """Ellipse detector: conic through 5 points, refit with the Fitzgibbon fit."""
    return RansacDetector(
        EllipseFitter(),
        params if params is not None else DEFAULT_ELLIPSE_PARAMS,
        seed=seed,
    )
