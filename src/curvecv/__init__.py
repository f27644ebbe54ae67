"""
curvecv: robust RANSAC fitting of lines, circles and ellipses to 2D point sets.

    from curvecv import PointSet, line_detector

    point_set = PointSet(points)
    detector = line_detector(seed=0)
    for result in detector.find_all(point_set):
        print(result.primitive_final, result.score)
"""

from .types import Points2D, Curve2d, CurveFitter, RansacResult
from .geometry import (
    AlgebraicLine, AlgebraicCircle, GeometricCircle, AlgebraicEllipse, GeometricEllipse,
)
from .ransac import (
    PointSet, UniqueSampler, RansacDetector, RansacParams,
    LineFitter, CircleFitter, EllipseFitter,
    line_detector, circle_detector, ellipse_detector,
    RansacError, InsufficientPointsError, FinalFitError,
)

__version__ = "0.1.0"

__all__ = [
    "Points2D", "Curve2d", "CurveFitter", "RansacResult",
    "AlgebraicLine", "AlgebraicCircle", "GeometricCircle", "AlgebraicEllipse", "GeometricEllipse",
    "PointSet", "UniqueSampler", "RansacDetector", "RansacParams",
    "LineFitter", "CircleFitter", "EllipseFitter",
    "line_detector", "circle_detector", "ellipse_detector",
    "RansacError", "InsufficientPointsError", "FinalFitError",
]
