"""
Fitting package

Algebraic fit strategies. Every fit takes an (N,2) point array and
returns a primitive, or None if the points are degenerate.
"""
from .line import fit_line_2points, fit_line_orthogonal
from .circle import (
    fit_circle_3points, fit_circle_kasa, fit_circle_pratt, fit_circle_hyper,
    CircleFitType, get_circle_fit,
)
from .ellipse import fit_ellipse_5points, fit_ellipse_fitzgibbon

__all__ = [
    "fit_line_2points", "fit_line_orthogonal",
    "fit_circle_3points", "fit_circle_kasa", "fit_circle_pratt", "fit_circle_hyper",
    "CircleFitType", "get_circle_fit",
    "fit_ellipse_5points", "fit_ellipse_fitzgibbon",
]
