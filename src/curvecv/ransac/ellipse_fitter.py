# Andy Zhao
"""
Adapter: makes the ellipse fit functions conform to the CurveFitter Protocol.

Unlike lines and circles, ellipse draws have no sampling precondition;
degenerate 5-point draws are left to the minimal fit to reject.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..types import Points2D, CurveFitter
from ..geometry.ellipse import GeometricEllipse
from ..fitting.ellipse import fit_ellipse_5points, fit_ellipse_fitzgibbon


@dataclass(frozen=True)
class EllipseFitter(CurveFitter[GeometricEllipse]):

    @property
    def min_samples(self) -> int:
        return 5

    def accept_draw(self, pts: Points2D) -> bool:
        return True

    def fit_minimal(self, pts: Points2D) -> Optional[GeometricEllipse]:
        return fit_ellipse_5points(pts)

    def fit_final(self, pts: Points2D) -> Optional[GeometricEllipse]:
        return fit_ellipse_fitzgibbon(pts)
