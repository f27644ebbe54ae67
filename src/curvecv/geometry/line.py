# Andy Zhao
"""
Straight line in algebraic (normal) form:

    a*x + b*y + c = 0,   with a^2 + b^2 = 1

Because the normal (a, b) is a unit vector, a*x + b*y + c is directly the
signed perpendicular distance of (x, y) to the line.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
import numpy.typing as npt

from ..types import FloatArray, as_query


@dataclass(frozen=True)
class AlgebraicLine:
    a: float
    b: float
    c: float

    # ---------- Factories ----------
    @classmethod
    def from_coefficients(cls, a: float, b: float, c: float, eps: float = 1e-12) -> Optional[AlgebraicLine]:
        """
        Build a normalized line from arbitrary (a, b, c).
        Returns None if the normal vector (a, b) is (numerically) zero.
        """
        norm = math.hypot(a, b)
        if not np.isfinite(norm) or norm < eps:
            return None
        return cls(float(a / norm), float(b / norm), float(c / norm))

    @classmethod
    def from_points(cls, p1: npt.ArrayLike, p2: npt.ArrayLike, eps: float = 1e-12) -> Optional[AlgebraicLine]:
        """
        Line through two points. None if the points coincide.
        """
        x1, y1 = map(float, np.asarray(p1, dtype=np.float64))
        x2, y2 = map(float, np.asarray(p2, dtype=np.float64))
        a = y1 - y2
        b = x2 - x1
        c = -a * x1 - b * y1
        return cls.from_coefficients(a, b, c, eps=eps)

    # ---------- Queries ----------
    def distance(self, points: npt.ArrayLike) -> FloatArray:
        """
        Signed perpendicular distance; the sign tells the side of the line.
        """
        pts, single = as_query(points)
        d = self.a * pts[:, 0] + self.b * pts[:, 1] + self.c
        return d[0] if single else d

    @property
    def angle(self) -> float:
        """Angle of the normal vector (a, b), in (-pi, pi]."""
        return math.atan2(self.b, self.a)

    def slope_intercept(self) -> Optional[tuple[float, float]]:
        """
        Return (k, d) for y = k*x + d, or None for a vertical line.
        """
        if abs(self.b) < 1e-12:
            return None
        return -self.a / self.b, -self.c / self.b

    def closest_point(self, points: npt.ArrayLike) -> FloatArray:
        """Orthogonal projection of points onto the line."""
        pts, single = as_query(points)
        d = self.a * pts[:, 0] + self.b * pts[:, 1] + self.c
        proj = pts - np.outer(d, np.array([self.a, self.b]))
        return proj[0] if single else proj

    def __str__(self) -> str:
        return f"AlgebraicLine <a = {self.a:.3f}, b = {self.b:.3f}, c = {self.c:.3f}>"
