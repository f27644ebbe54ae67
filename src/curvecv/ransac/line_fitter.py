# Andy Zhao
"""
Adapter: makes the line fit functions conform to the CurveFitter Protocol.

This keeps ransac/core.py generic and reusable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..types import Points2D, CurveFitter
from ..geometry.line import AlgebraicLine
from ..fitting.line import fit_line_2points, fit_line_orthogonal


@dataclass(frozen=True)
class LineFitter(CurveFitter[AlgebraicLine]):
    # Pairs closer than this give unstable line directions and are redrawn
    min_pair_distance: float = 25.0

    def __post_init__(self) -> None:
        if self.min_pair_distance < 0.0:
            raise ValueError("LineFitter.min_pair_distance must be >= 0")

    @property
    def min_samples(self) -> int:
        return 2

    def accept_draw(self, pts: Points2D) -> bool:
        d2 = float(np.sum((pts[1] - pts[0]) ** 2))
        return d2 >= self.min_pair_distance ** 2

    def fit_minimal(self, pts: Points2D) -> Optional[AlgebraicLine]:
        return fit_line_2points(pts)

    def fit_final(self, pts: Points2D) -> Optional[AlgebraicLine]:
        return fit_line_orthogonal(pts)
