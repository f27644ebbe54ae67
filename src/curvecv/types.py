# Andy Zhao

"""
Shared typed primitives for the curve fitting / RANSAC pipeline.

Defines:
- Typed NumPy aliases for geometry
    - Points are (N,2) float arrays
    - Draws are (k,) int index arrays into a point set
- Curve protocol (anything that can measure its distance to a point)
- Fitter protocol for RANSAC (minimal fit + final fit + draw precondition)
- Structured RANSAC result container (draw + primitives + inliers + stats)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar, Generic, Optional, TypeAlias

import numpy as np
import numpy.typing as npt

# ---------- Numpy typing aliases ----------
# - float64 for geometry (more stable for linear algebra)
# - bool_ for presence / inlier masks
# - intp for point indices

FloatArray: TypeAlias = npt.NDArray[np.float64]
BoolArray: TypeAlias = npt.NDArray[np.bool_]
IndexArray: TypeAlias = npt.NDArray[np.intp]

# Points in 2D image coordinates. Stored as float64 for consistency in math.
Points2D: TypeAlias = FloatArray      # shape: (N, 2)

# Presence mask of a point set: True = present, False = already claimed
Mask1D: TypeAlias = BoolArray         # shape: (N,)


# ---------- Curve typing ----------
class Curve2d(Protocol):
    """
    A fitted 2D primitive (line, circle, ellipse).

    The only thing RANSAC needs from a primitive is its distance to points.
    """

    def distance(self, points: npt.ArrayLike) -> FloatArray:
        """
        Perpendicular distance from each point to the primitive.

        points: (N,2) array or a single (2,) point.
        Returns (N,) distances, or a 0-d array for a single point.
        Lines may return signed values; callers compare |d| to a threshold.
        """
        ...


C = TypeVar("C", bound=Curve2d)


class CurveFitter(Protocol[C]):
    """
    Interface that a primitive type must implement to be usable by the generic RANSAC detector.

    RANSAC steps:
    1) Draw min_samples points (accept_draw may reject unstable draws)
    2) Fit a candidate from the draw (exact interpolation)
    3) Refit a better primitive from all inliers (least squares)
    """

    @property
    def min_samples(self) -> int:
        """Number of points in one draw (line=2, circle=3, ellipse=5)."""
        ...

    def accept_draw(self, pts: Points2D) -> bool:
        """
        Sampling precondition on a draw (e.g. minimum pair distance for lines).
        Return False to make the detector redraw.
        """
        ...

    def fit_minimal(self, pts: Points2D) -> Optional[C]:
        """
        Fit from exactly min_samples points.
        Return None if the sample is degenerate (e.g. collinear points for a circle).
        """
        ...

    def fit_final(self, pts: Points2D) -> Optional[C]:
        """
        Refit the primitive using all inliers.
        Return None if the set is degenerate or the solve fails.
        """
        ...


# ---------- RANSAC output container ----------
# frozen=True means "immutable" after construction
@dataclass(frozen=True)
class RansacResult(Generic[C]):
    draw: Points2D              # the winning minimal sample (k,2)
    draw_indices: IndexArray    # slot indices of the draw in the point set
    primitive_init: C           # primitive from the minimal fit of the draw
    primitive_final: C          # primitive refit to all inliers
    score: int                  # inlier count of primitive_init
    inliers: Points2D           # (M,2) inlier points of primitive_init
    inlier_indices: IndexArray  # slot indices of the inliers
    iterations: int             # how many RANSAC iterations were actually run
    threshold: float            # the distance threshold used


# ---------- Helper Functions ----------
def as_points(pts: npt.ArrayLike) -> Points2D:
    """
    Convert input to a (N,2) float64 array and validate its shape.
    """
    arr = np.asarray(pts, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Expected points shape (N, 2) but got {arr.shape}")
    return arr


def as_query(points: npt.ArrayLike) -> tuple[Points2D, bool]:
    """
    Accept either one (2,) point or (N,2) points for distance queries.

    Returns the points as (N,2) plus a flag telling if the input was a single point,
    so the caller can squeeze the result back.
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.shape == (2,):
        return arr.reshape(1, 2), True
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Expected a (2,) point or (N, 2) points but got {arr.shape}")
    return arr, False


def is_finite_params(*values: float) -> bool:
    """
    Verify fitted parameters. Used for rejecting failed fits.
    """
    return bool(np.isfinite(np.asarray(values, dtype=np.float64)).all())
