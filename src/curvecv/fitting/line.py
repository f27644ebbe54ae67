# Andy Zhao
"""
Line fitting.

Minimal fit (k = 2):
    the unique line through two distinct points.

Final fit (N >= 2):
    orthogonal (total least squares) regression. Minimizes the sum of squared
    perpendicular distances, not vertical offsets, so vertical lines work too.

    With centroid (xm, ym) and scatter matrix

        S = [[sxx, sxy],
             [sxy, syy]]

    the line normal (a, b) is the eigenvector of S with the smallest eigenvalue,
    and c = -(a*xm + b*ym).
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..geometry.line import AlgebraicLine
from ..types import Points2D, as_points


def fit_line_2points(pts: Points2D, eps: float = 1e-12) -> Optional[AlgebraicLine]:
    """
    Fit a line from exactly 2 points.

    Returns:
      AlgebraicLine, or None if the points coincide.
    """
    pts = as_points(pts)
    if pts.shape[0] != 2:
        raise ValueError(f"fit_line_2points expects (2,2) input, got {pts.shape}")
    return AlgebraicLine.from_points(pts[0], pts[1], eps=eps)


def fit_line_orthogonal(pts: Points2D, eps: float = 1e-12) -> Optional[AlgebraicLine]:
    """
    Orthogonal regression line through N >= 2 points (eigen decomposition).

    Returns None if there are fewer than 2 points or all points coincide,
    i.e. the scatter matrix has no dominant direction.
    """
    pts = as_points(pts)
    if pts.shape[0] < 2:
        return None

    centroid = pts.mean(axis=0)
    centered = pts - centroid

    # 2x2 scatter matrix
    S = centered.T @ centered

    # eigh returns eigenvalues in ascending order
    try:
        eigvals, eigvecs = np.linalg.eigh(S)
    except np.linalg.LinAlgError:
        return None

    # All points (numerically) on top of each other: direction undefined
    if eigvals[1] <= eps * max(1.0, float(np.trace(np.abs(S)))):
        return None

    a, b = eigvecs[:, 0]
    c = -(a * centroid[0] + b * centroid[1])
    return AlgebraicLine.from_coefficients(float(a), float(b), float(c))
