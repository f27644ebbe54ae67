"""
Geometry package

Fitted 2D primitives. Each exposes distance(points) so the
generic RANSAC detector can score it.
"""
from .line import AlgebraicLine
from .circle import AlgebraicCircle, GeometricCircle
from .ellipse import AlgebraicEllipse, GeometricEllipse

__all__ = [
    "AlgebraicLine",
    "AlgebraicCircle", "GeometricCircle",
    "AlgebraicEllipse", "GeometricEllipse",
]
