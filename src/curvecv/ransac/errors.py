# Andy Zhao
"""
Error taxonomy for RANSAC extraction.

Callers must be able to tell apart:
  - not enough present points to draw a sample  -> InsufficientPointsError
  - no primitive reached the minimum support     -> find_next() returns None
  - a primitive was found but the refit failed   -> FinalFitError
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np


class RansacError(Exception):
    """Base class for RANSAC extraction errors."""


class InsufficientPointsError(RansacError, ValueError):
    """Fewer present points than the minimal sample size."""

    def __init__(self, n_present: int, min_samples: int) -> None:
        self.n_present = n_present
        self.min_samples = min_samples
        super().__init__(
            f"need at least {min_samples} present points to draw a sample, got {n_present}"
        )


class FinalFitError(RansacError, RuntimeError):
    """
    The search found a supported candidate, but the final fit over its inliers failed.

    The usable part of the search (draw, initial primitive, score, inliers and
    their slot indices) is kept on the exception so the caller can still use or
    inspect it. If the inliers were claimed, point_set.restore(err.inlier_indices)
    undoes just this claim.
    """

    def __init__(
        self,
        *,
        draw: np.ndarray,
        primitive_init: Any,
        score: int,
        inliers: np.ndarray,
        draw_indices: Optional[np.ndarray] = None,
        inlier_indices: Optional[np.ndarray] = None,
        message: Optional[str] = None,
    ) -> None:
        self.draw = draw
        self.draw_indices = draw_indices
        self.primitive_init = primitive_init
        self.score = score
        self.inliers = inliers
        self.inlier_indices = inlier_indices
        super().__init__(
            message or f"final fit failed on {inliers.shape[0]} inliers of {primitive_init}"
        )
