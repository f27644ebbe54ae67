# Andy Zhao
"""
Ellipse representations.

Algebraic form (general conic, what the linear fits produce):

    A*x^2 + B*x*y + C*y^2 + D*x + E*y + F = 0

The conic is an ellipse iff B^2 - 4AC < 0.

Geometric form (what callers want):

    semi-axes ra >= rb, center (xc, yc), orientation theta in [0, pi)

Distance to a point is the true orthogonal (closest point) distance,
not the algebraic residual.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
import numpy.typing as npt

from ..types import FloatArray, Points2D, as_query, is_finite_params


# Bisection settings for the closest-point root finder
_MAX_BISECTIONS = 100
_REL_TOL = 1e-12


@dataclass(frozen=True)
class AlgebraicEllipse:
    A: float
    B: float
    C: float
    D: float
    E: float
    F: float

    @property
    def discriminant(self) -> float:
        return self.B * self.B - 4.0 * self.A * self.C

    def is_ellipse(self) -> bool:
        return self.discriminant < 0.0

    def algebraic_distance(self, points: npt.ArrayLike) -> FloatArray:
        pts, single = as_query(points)
        x, y = pts[:, 0], pts[:, 1]
        d = self.A * x * x + self.B * x * y + self.C * y * y + self.D * x + self.E * y + self.F
        return d[0] if single else d


@dataclass(frozen=True)
class GeometricEllipse:
    ra: float
    rb: float
    xc: float
    yc: float
    theta: float = 0.0

    def __post_init__(self) -> None:
        # Make sure ra is always the major axis and theta is in [0, pi)
        ra, rb, theta = float(self.ra), float(self.rb), float(self.theta)
        if ra < rb:
            ra, rb = rb, ra
            theta = theta + 0.5 * math.pi
        theta = math.fmod(theta, math.pi)
        if theta < 0.0:
            theta += math.pi
        object.__setattr__(self, "ra", ra)
        object.__setattr__(self, "rb", rb)
        object.__setattr__(self, "xc", float(self.xc))
        object.__setattr__(self, "yc", float(self.yc))
        object.__setattr__(self, "theta", theta)

    # ---------- Conversions ----------
    @classmethod
    def from_algebraic(cls, ae: AlgebraicEllipse) -> Optional[GeometricEllipse]:
        """
        Convert conic parameters to (ra, rb, xc, yc, theta).

        Returns None if the conic is not a real ellipse
        (hyperbola/parabola, imaginary or degenerate ellipse).
        """
        A, B, C, D, E, F = ae.A, ae.B, ae.C, ae.D, ae.E, ae.F
        p = B * B - 4.0 * A * C
        if not p < 0.0:
            return None

        q = math.sqrt((A - C) ** 2 + B * B)
        s = 2.0 * (A * E * E + C * D * D + F * B * B - B * D * E - 4.0 * A * C * F)

        # both squared semi-axes must be positive for a real ellipse
        ra2 = s / (p * (-A - C + q))
        rb2 = s / (p * (-A - C - q))
        if not is_finite_params(ra2, rb2) or ra2 <= 0.0 or rb2 <= 0.0:
            return None

        xc = (2.0 * C * D - B * E) / p
        yc = (2.0 * A * E - B * D) / p
        theta = 0.5 * math.atan2(-B, C - A)
        if not is_finite_params(xc, yc, theta):
            return None
        return cls(math.sqrt(ra2), math.sqrt(rb2), xc, yc, theta)

    def to_algebraic(self) -> AlgebraicEllipse:
        a2, b2 = self.ra * self.ra, self.rb * self.rb
        st, ct = math.sin(self.theta), math.cos(self.theta)
        A = a2 * st * st + b2 * ct * ct
        B = 2.0 * (b2 - a2) * st * ct
        C = a2 * ct * ct + b2 * st * st
        D = -2.0 * A * self.xc - B * self.yc
        E = -B * self.xc - 2.0 * C * self.yc
        F = A * self.xc ** 2 + B * self.xc * self.yc + C * self.yc ** 2 - a2 * b2
        return AlgebraicEllipse(A, B, C, D, E, F)

    # ---------- Properties ----------
    @property
    def center(self) -> FloatArray:
        return np.array([self.xc, self.yc], dtype=np.float64)

    @property
    def area(self) -> float:
        return math.pi * self.ra * self.rb

    def parameters(self) -> tuple[float, float, float, float, float]:
        return self.ra, self.rb, self.xc, self.yc, self.theta

    # ---------- Distance ----------
    def _to_local(self, pts: Points2D) -> tuple[FloatArray, FloatArray]:
        """Rotate/translate points into the ellipse frame (major axis = u axis)."""
        ct, st = math.cos(self.theta), math.sin(self.theta)
        dx = pts[:, 0] - self.xc
        dy = pts[:, 1] - self.yc
        u = ct * dx + st * dy
        v = -st * dx + ct * dy
        return u, v

    def _project_first_quadrant(self, y0: FloatArray, y1: FloatArray) -> tuple[FloatArray, FloatArray]:
        """
        Closest ellipse point for query points with y0, y1 >= 0 (ellipse frame).

        Solves the orthogonality condition by bisection on the scaled parameter s
        (robust for points inside, outside and near the axes).
        """
        e0, e1 = self.ra, self.rb
        x0 = np.empty_like(y0)
        x1 = np.empty_like(y1)

        # Generic case: strictly inside the first quadrant
        m_gen = (y0 > 0.0) & (y1 > 0.0)
        if np.any(m_gen):
            z0 = y0[m_gen] / e0
            z1 = y1[m_gen] / e1
            g = z0 * z0 + z1 * z1 - 1.0
            r0 = (e0 / e1) ** 2
            n0 = r0 * z0
            s0 = z1 - 1.0
            s1 = np.where(g < 0.0, 0.0, np.hypot(n0, z1) - 1.0)
            s = 0.5 * (s0 + s1)
            for _ in range(_MAX_BISECTIONS):
                s = 0.5 * (s0 + s1)
                ratio0 = n0 / (s + r0)
                ratio1 = z1 / (s + 1.0)
                gs = ratio0 * ratio0 + ratio1 * ratio1 - 1.0
                s0 = np.where(gs > 0.0, s, s0)
                s1 = np.where(gs < 0.0, s, s1)
                if np.all(s1 - s0 <= _REL_TOL * (1.0 + np.abs(s))):
                    break
            x0[m_gen] = r0 * y0[m_gen] / (s + r0)
            x1[m_gen] = y1[m_gen] / (s + 1.0)

        # On the minor axis (y0 == 0, y1 > 0): closest point is the co-vertex
        m_minor = (y0 <= 0.0) & (y1 > 0.0)
        x0[m_minor] = 0.0
        x1[m_minor] = e1

        # On the major axis (y1 == 0)
        m_major = y1 <= 0.0
        if np.any(m_major):
            numer0 = e0 * y0[m_major]
            denom0 = e0 * e0 - e1 * e1
            inner = numer0 < denom0
            xde0 = np.zeros_like(numer0)
            if denom0 > 0.0:
                xde0[inner] = numer0[inner] / denom0
            px0 = np.where(inner, e0 * xde0, e0)
            px1 = np.where(inner, e1 * np.sqrt(np.clip(1.0 - xde0 * xde0, 0.0, None)), 0.0)
            x0[m_major] = px0
            x1[m_major] = px1

        return x0, x1

    def closest_point(self, points: npt.ArrayLike) -> FloatArray:
        """Orthogonal projection of points onto the ellipse."""
        pts, single = as_query(points)
        u, v = self._to_local(pts)
        x0, x1 = self._project_first_quadrant(np.abs(u), np.abs(v))
        pu = np.copysign(x0, u)
        pv = np.copysign(x1, v)
        ct, st = math.cos(self.theta), math.sin(self.theta)
        proj = np.column_stack([self.xc + ct * pu - st * pv, self.yc + st * pu + ct * pv])
        return proj[0] if single else proj

    def distance(self, points: npt.ArrayLike) -> FloatArray:
        """
        Unsigned orthogonal distance to the ellipse outline.
        """
        pts, single = as_query(points)
        u, v = self._to_local(pts)
        y0, y1 = np.abs(u), np.abs(v)
        x0, x1 = self._project_first_quadrant(y0, y1)
        d = np.hypot(x0 - y0, x1 - y1)
        return d[0] if single else d

    def algebraic_distance(self, points: npt.ArrayLike) -> FloatArray:
        return self.to_algebraic().algebraic_distance(points)

    def __str__(self) -> str:
        return (f"GeometricEllipse [ra={self.ra:.3f}, rb={self.rb:.3f}, "
                f"xc={self.xc:.3f}, yc={self.yc:.3f}, theta={self.theta:.3f}]")
