# Andy Zhao
"""
Circle fitting.

Minimal fit (k = 3):
    circumcircle of three non-collinear points (closed form).

Final fits (N >= 3), all algebraic, solving for (A, B, C, D) in

    A*(x^2 + y^2) + B*x + C*y + D = 0

  - Kasa:  plain linear least squares with A = 1. Fast, biased towards
           small circles when only an arc is observed.
  - Pratt: minimizes the algebraic error under the constraint
           B^2 + C^2 - 4AD = 1 (SVD based).
  - Hyper: "hyper-accurate" fit, removes the essential bias of Pratt
           (SVD based). Used as default final fit.

Pratt and Hyper follow Chernov's SVD formulation on centered data:
    Z = x^2 + y^2,  M = [Z, x, y, 1] = U S V^T
    singular case  -> A = last right singular vector (exact fit)
    regular case   -> Y = V S V^T, eigen-decompose Y N^-1 Y and take the
                      eigenvector of the smallest positive eigenvalue, A = Y^-1 * v
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

import numpy as np

from ..geometry.circle import AlgebraicCircle, GeometricCircle
from ..types import Points2D, as_points


# ---------- Degeneracy Check Helpers ----------
def _cross2(u: np.ndarray, v: np.ndarray) -> float:
    return float(u[0] * v[1] - u[1] * v[0])


def _is_degenerate_triplet(pts: Points2D, eps: float) -> bool:
    """
    Check whether 3 points are (nearly) collinear or coincident.

    The cross product (2x triangle area) is compared against the squared
    longest side, so the test does not depend on the coordinate scale.
    """
    u = pts[1] - pts[0]
    v = pts[2] - pts[0]
    w = pts[2] - pts[1]
    scale = max(float(u @ u), float(v @ v), float(w @ w))
    if scale == 0.0:
        return True
    return abs(_cross2(u, v)) < eps * scale


# ---------- Minimal fit ----------
def fit_circle_3points(pts: Points2D, eps: float = 1e-9) -> Optional[GeometricCircle]:
    """
    Fit the circle through exactly 3 points.

    Returns:
      GeometricCircle, or None if the points are collinear / coincident
      (the "circle" would have infinite radius).
    """
    pts = as_points(pts)
    if pts.shape[0] != 3:
        raise ValueError(f"fit_circle_3points expects (3,2) input, got {pts.shape}")

    if _is_degenerate_triplet(pts, eps):
        return None

    # Work relative to the first point for better conditioning
    p0 = pts[0]
    u = pts[1] - p0
    v = pts[2] - p0
    d = 2.0 * _cross2(u, v)
    uu = float(u @ u)
    vv = float(v @ v)

    ux = (v[1] * uu - u[1] * vv) / d
    uy = (u[0] * vv - v[0] * uu) / d
    r = float(np.hypot(ux, uy))

    circle = GeometricCircle(float(p0[0] + ux), float(p0[1] + uy), r)
    if not np.isfinite([circle.xc, circle.yc, circle.r]).all():
        return None
    return circle


# ---------- Least-squares fits ----------
def fit_circle_kasa(pts: Points2D) -> Optional[GeometricCircle]:
    """
    Kasa fit: solve  2*xc*x + 2*yc*y + c = x^2 + y^2  in the least-squares sense.
    """
    pts = as_points(pts)
    if pts.shape[0] < 3:
        return None

    centroid = pts.mean(axis=0)
    x = pts[:, 0] - centroid[0]
    y = pts[:, 1] - centroid[1]

    A = np.column_stack([x, y, np.ones_like(x)])
    b = x * x + y * y
    try:
        sol, _, rank, _ = np.linalg.lstsq(A, b, rcond=None)
    except np.linalg.LinAlgError:
        return None

    # rank < 3 means collinear or coincident points
    if rank < 3:
        return None

    # Convert back to (A, B, C, D) with A = 1 and shift to original frame
    ac = AlgebraicCircle(1.0, -sol[0], -sol[1], -sol[2])
    circle = GeometricCircle.from_algebraic(ac)
    if circle is None:
        return None
    return GeometricCircle(circle.xc + centroid[0], circle.yc + centroid[1], circle.r)


def _fit_circle_svd(pts: Points2D, hyper: bool, eps: float = 1e-12) -> Optional[GeometricCircle]:
    """
    Shared SVD machinery for the Pratt and Hyper fits (see module docstring).
    """
    pts = as_points(pts)
    if pts.shape[0] < 3:
        return None

    centroid = pts.mean(axis=0)
    x = pts[:, 0] - centroid[0]
    y = pts[:, 1] - centroid[1]
    z = x * x + y * y

    M = np.column_stack([z, x, y, np.ones_like(x)])
    try:
        # full V is needed to get the null vector when N < 4
        _, S, Vt = np.linalg.svd(M, full_matrices=M.shape[0] < 4)
    except np.linalg.LinAlgError:
        return None

    if S[0] <= 0.0:
        return None

    if S.shape[0] < 4 or S[3] / S[0] < eps:
        # Singular case: points lie exactly on a circle (or line)
        params = Vt[-1, :]
    else:
        V = Vt.T
        Y = V @ np.diag(S) @ Vt
        if hyper:
            z_mean = float(z.mean())
            Ninv = np.array([[0.0, 0.0, 0.0, 0.5],
                             [0.0, 1.0, 0.0, 0.0],
                             [0.0, 0.0, 1.0, 0.0],
                             [0.5, 0.0, 0.0, -2.0 * z_mean]])
        else:
            Ninv = np.array([[0.0, 0.0, 0.0, -0.5],
                             [0.0, 1.0, 0.0, 0.0],
                             [0.0, 0.0, 1.0, 0.0],
                             [-0.5, 0.0, 0.0, 0.0]])

        # Y N^-1 Y is symmetric: eigh gives ascending eigenvalues.
        # The constraint matrix has exactly one negative eigenvalue, so the
        # smallest positive eigenvalue is the second one.
        try:
            _, E = np.linalg.eigh(Y @ Ninv @ Y)
        except np.linalg.LinAlgError:
            return None
        v = E[:, 1]
        params = V @ np.diag(1.0 / S) @ Vt @ v

    ac = AlgebraicCircle(*map(float, params))
    circle = GeometricCircle.from_algebraic(ac)
    if circle is None:
        return None
    return GeometricCircle(circle.xc + centroid[0], circle.yc + centroid[1], circle.r)


def fit_circle_pratt(pts: Points2D) -> Optional[GeometricCircle]:
    """Pratt fit (SVD based). None if the points do not determine a circle."""
    return _fit_circle_svd(pts, hyper=False)


def fit_circle_hyper(pts: Points2D) -> Optional[GeometricCircle]:
    """Hyper-accurate fit (SVD based). None if the points do not determine a circle."""
    return _fit_circle_svd(pts, hyper=True)


# ---------- Fit selection ----------
class CircleFitType(str, Enum):
    KASA = "kasa"
    PRATT = "pratt"
    HYPER = "hyper"


_FITS: dict[CircleFitType, Callable[[Points2D], Optional[GeometricCircle]]] = {
    CircleFitType.KASA: fit_circle_kasa,
    CircleFitType.PRATT: fit_circle_pratt,
    CircleFitType.HYPER: fit_circle_hyper,
}


def get_circle_fit(fit_type: CircleFitType | str) -> Callable[[Points2D], Optional[GeometricCircle]]:
    """
    Look up a final circle fit by type (or its name, e.g. "pratt").
    """
    return _FITS[CircleFitType(fit_type)]
