# Andy Zhao
"""
Circle representations.

Algebraic form (what the linear fits produce):

    A*(x^2 + y^2) + B*x + C*y + D = 0

Geometric form (what callers want):

    center (xc, yc), radius r

with
    xc = -B / (2A),  yc = -C / (2A),  r = sqrt(B^2 + C^2 - 4AD) / (2|A|)

A == 0 describes a straight line, so it has no geometric circle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
import numpy.typing as npt

from ..types import FloatArray, as_query, is_finite_params


@dataclass(frozen=True)
class AlgebraicCircle:
    A: float
    B: float
    C: float
    D: float

    def algebraic_distance(self, points: npt.ArrayLike) -> FloatArray:
        pts, single = as_query(points)
        x, y = pts[:, 0], pts[:, 1]
        d = self.A * (x * x + y * y) + self.B * x + self.C * y + self.D
        return d[0] if single else d


@dataclass(frozen=True)
class GeometricCircle:
    xc: float
    yc: float
    r: float

    @classmethod
    def from_algebraic(cls, ac: AlgebraicCircle, eps: float = 1e-12) -> Optional[GeometricCircle]:
        """
        Convert (A, B, C, D) to center/radius.

        Returns None if A is (relatively) zero, i.e. the fit degenerated to a line,
        or if the radius is not real.
        """
        A, B, C, D = ac.A, ac.B, ac.C, ac.D
        scale = max(abs(A), abs(B), abs(C), abs(D))
        if scale == 0.0 or abs(A) < eps * scale:
            return None

        radicand = B * B + C * C - 4.0 * A * D
        if radicand < 0.0:
            return None

        xc = -B / (2.0 * A)
        yc = -C / (2.0 * A)
        r = math.sqrt(radicand) / (2.0 * abs(A))
        if not is_finite_params(xc, yc, r):
            return None
        return cls(float(xc), float(yc), float(r))

    def to_algebraic(self) -> AlgebraicCircle:
        return AlgebraicCircle(
            A=1.0,
            B=-2.0 * self.xc,
            C=-2.0 * self.yc,
            D=self.xc * self.xc + self.yc * self.yc - self.r * self.r,
        )

    @property
    def center(self) -> FloatArray:
        return np.array([self.xc, self.yc], dtype=np.float64)

    @property
    def area(self) -> float:
        return math.pi * self.r * self.r

    def distance(self, points: npt.ArrayLike) -> FloatArray:
        """
        Unsigned radial deviation | ||p - center|| - r |.
        """
        pts, single = as_query(points)
        d = np.abs(np.hypot(pts[:, 0] - self.xc, pts[:, 1] - self.yc) - self.r)
        return d[0] if single else d

    def __str__(self) -> str:
        return f"GeometricCircle [xc={self.xc:.3f}, yc={self.yc:.3f}, r={self.r:.3f}]"
