# Andy Zhao
"""
RANSAC package

This module provides:
- A reusable generic RANSAC detector
- Unique random draws from point sets with absent slots
- Fitter adapters for lines, circles and ellipses
- Ready-made detectors with default parameters
"""

from ..types import CurveFitter, RansacResult

from .errors import RansacError, InsufficientPointsError, FinalFitError

from .point_set import PointSet

from .sampler import UniqueSampler, has_duplicates

from .core import RansacDetector, RansacParams

from .line_fitter import LineFitter
from .circle_fitter import CircleFitter
from .ellipse_fitter import EllipseFitter

from .detectors import (
    line_detector, circle_detector, ellipse_detector,
    DEFAULT_LINE_PARAMS, DEFAULT_CIRCLE_PARAMS, DEFAULT_ELLIPSE_PARAMS,
)

__all__ = [
    "CurveFitter", "RansacResult",
    "RansacError", "InsufficientPointsError", "FinalFitError",
    "PointSet",
    "UniqueSampler", "has_duplicates",
    "RansacDetector", "RansacParams",
    "LineFitter", "CircleFitter", "EllipseFitter",
    "line_detector", "circle_detector", "ellipse_detector",
    "DEFAULT_LINE_PARAMS", "DEFAULT_CIRCLE_PARAMS", "DEFAULT_ELLIPSE_PARAMS",
]
