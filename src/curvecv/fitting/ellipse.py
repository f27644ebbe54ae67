# Andy Zhao
"""
Ellipse fitting.

Both fits estimate the conic parameters p = (A, B, C, D, E, F) of

    A*x^2 + B*x*y + C*y^2 + D*x + E*y + F = 0

and convert them to a GeometricEllipse. A result that is not a real ellipse
(hyperbola, parabola, imaginary ellipse) counts as "no fit".

Minimal fit (k = 5):
    5 points in general position determine one conic: p spans the null space
    of the 5x6 design matrix.

Final fit (N >= 5):
    Fitzgibbon's direct least-squares ellipse fit, in the numerically stable
    formulation of Halir & Flusser (the design matrix is split into its
    quadratic and linear parts so only a 3x3 eigenproblem remains).

Coordinates are normalized (centered and scaled to mean distance sqrt(2))
before fitting; parameters are mapped back afterwards.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..geometry.ellipse import AlgebraicEllipse, GeometricEllipse
from ..types import FloatArray, Points2D, as_points


# ---------- Normalization Helpers ----------
def _normalize(pts: Points2D) -> tuple[Points2D, float, float, float]:
    """
    Center points at the origin and scale them to mean distance sqrt(2).
    Returns (normalized points, mx, my, s) with u = (x - mx) / s.
    """
    mx, my = pts.mean(axis=0)
    centered = pts - np.array([mx, my])
    mean_dist = float(np.mean(np.hypot(centered[:, 0], centered[:, 1])))
    s = mean_dist / np.sqrt(2.0) if mean_dist > 0.0 else 1.0
    return centered / s, float(mx), float(my), float(s)


def _denormalize(p: FloatArray, mx: float, my: float, s: float) -> AlgebraicEllipse:
    """
    Map conic parameters fitted on u = (x - mx)/s, v = (y - my)/s back to (x, y).
    The whole equation is multiplied by s^2.
    """
    A, B, C, D, E, F = map(float, p)
    D2 = -2.0 * A * mx - B * my + D * s
    E2 = -B * mx - 2.0 * C * my + E * s
    F2 = (A * mx * mx + B * mx * my + C * my * my
          - D * s * mx - E * s * my + F * s * s)
    return AlgebraicEllipse(A, B, C, D2, E2, F2)


def _design_matrix(pts: Points2D) -> FloatArray:
    x = pts[:, 0]
    y = pts[:, 1]
    return np.column_stack([x * x, x * y, y * y, x, y, np.ones_like(x)])


# ---------- Minimal fit ----------
def fit_ellipse_5points(pts: Points2D, eps: float = 1e-10) -> Optional[GeometricEllipse]:
    """
    Fit the conic through exactly 5 points.

    Returns:
      GeometricEllipse, or None if the 5 points do not determine a unique conic
      (e.g. 4 collinear points) or the conic is not an ellipse.
    """
    pts = as_points(pts)
    if pts.shape[0] != 5:
        raise ValueError(f"fit_ellipse_5points expects (5,2) input, got {pts.shape}")

    npts, mx, my, s = _normalize(pts)
    M = _design_matrix(npts)   # (5,6)

    try:
        _, S, Vt = np.linalg.svd(M, full_matrices=True)
    except np.linalg.LinAlgError:
        return None

    # A one-dimensional null space requires rank 5
    if S[0] <= 0.0 or S[-1] / S[0] < eps:
        return None

    p = Vt[-1, :]
    return GeometricEllipse.from_algebraic(_denormalize(p, mx, my, s))


# ---------- Final fit ----------
def fit_ellipse_fitzgibbon(pts: Points2D) -> Optional[GeometricEllipse]:
    """
    Direct least-squares ellipse fit (Fitzgibbon, stable Halir & Flusser variant).

    Returns None if there are fewer than 5 points, the linear part is singular,
    or no eigenvector satisfies the ellipse constraint 4AC - B^2 > 0.
    """
    pts = as_points(pts)
    if pts.shape[0] < 5:
        return None

    npts, mx, my, s = _normalize(pts)
    x = npts[:, 0]
    y = npts[:, 1]

    D1 = np.column_stack([x * x, x * y, y * y])        # quadratic part
    D2 = np.column_stack([x, y, np.ones_like(x)])      # linear part

    S1 = D1.T @ D1
    S2 = D1.T @ D2
    S3 = D2.T @ D2

    # Linear parameters as a function of the quadratic ones: a2 = T a1
    try:
        T = -np.linalg.solve(S3, S2.T)
    except np.linalg.LinAlgError:
        return None

    # Reduced scatter matrix, premultiplied by the inverse constraint matrix
    #   C1 = [[0, 0, 2], [0, -1, 0], [2, 0, 0]]
    Mr = S1 + S2 @ T
    M = np.vstack([Mr[2] / 2.0, -Mr[1], Mr[0] / 2.0])

    try:
        eigvals, eigvecs = np.linalg.eig(M)
    except np.linalg.LinAlgError:
        return None

    eigvals = np.real(eigvals)
    eigvecs = np.real(eigvecs)

    # Ellipse constraint for each eigenvector: 4AC - B^2 > 0
    cond = 4.0 * eigvecs[0] * eigvecs[2] - eigvecs[1] ** 2
    valid = np.flatnonzero(cond > 0.0)
    if valid.size == 0:
        return None

    # Normally exactly one candidate; otherwise take the smallest eigenvalue (least error)
    best = valid[np.argmin(eigvals[valid])]
    a1 = eigvecs[:, best]
    p = np.concatenate([a1, T @ a1])
    if not np.isfinite(p).all():
        return None

    return GeometricEllipse.from_algebraic(_denormalize(p, mx, my, s))
