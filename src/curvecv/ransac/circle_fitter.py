# Andy Zhao
"""
Adapter: makes the circle fit functions conform to the CurveFitter Protocol.

Minimal fit: circumcircle of 3 points.
Final fit: selectable algebraic fit (Hyper by default, Pratt or Kasa).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..types import Points2D, CurveFitter
from ..geometry.circle import GeometricCircle
from ..fitting.circle import CircleFitType, fit_circle_3points, get_circle_fit


@dataclass(frozen=True)
class CircleFitter(CurveFitter[GeometricCircle]):
    final_fit: CircleFitType = CircleFitType.HYPER

    def __post_init__(self) -> None:
        # Accept plain names ("pratt") as well as enum members
        object.__setattr__(self, "final_fit", CircleFitType(self.final_fit))

    @property
    def min_samples(self) -> int:
        return 3

    def accept_draw(self, pts: Points2D) -> bool:
        """
        Reject draws where two slots hold the same coordinates
        (distinct slots may still carry equal points).
        """
        return np.unique(pts, axis=0).shape[0] == pts.shape[0]

    def fit_minimal(self, pts: Points2D) -> Optional[GeometricCircle]:
        return fit_circle_3points(pts)

    def fit_final(self, pts: Points2D) -> Optional[GeometricCircle]:
        return get_circle_fit(self.final_fit)(pts)
