# Andy Zhao
"""
Point set with per-slot presence.

Sequential extraction (find a line, remove its points, find the next one)
needs a point array whose slots can be "claimed". Instead of nulling entries,
the coordinates stay fixed and a boolean mask tells which slots are still present:

    points  : (N,2) float64, never changes after construction
    present : (N,)  bool, True = available, False = claimed by a previous extraction

The slot index is the identity of a point: draws and inliers refer to indices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np
import numpy.typing as npt

from ..types import IndexArray, Mask1D, Points2D, as_points


@dataclass
class PointSet:
    points: Points2D
    present: Mask1D = field(default=None)  # type: ignore[assignment]
    # presence at construction; restore() never goes beyond it
    _initial: Mask1D = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.points = as_points(self.points).copy()
        # Coordinates are read-only; only the presence mask changes
        self.points.setflags(write=False)

        n = self.points.shape[0]
        if self.present is None:
            self.present = np.ones((n,), dtype=bool)
        else:
            self.present = np.asarray(self.present, dtype=bool).reshape(-1).copy()
            if self.present.shape[0] != n:
                raise ValueError(f"present mask must have length {n}, got {self.present.shape[0]}")

        # Non-finite coordinates can never be fitted or scored
        self.present &= np.isfinite(self.points).all(axis=1)
        self._initial = self.present.copy()
        self._initial.setflags(write=False)

    # ---------- Construction ----------
    @classmethod
    def from_optional(cls, items: Sequence[Optional[npt.ArrayLike]]) -> PointSet:
        """
        Build from a sequence of optional points; None marks an absent slot.
        """
        n = len(items)
        pts = np.zeros((n, 2), dtype=np.float64)
        present = np.zeros((n,), dtype=bool)
        for i, p in enumerate(items):
            if p is None:
                continue
            pts[i] = np.asarray(p, dtype=np.float64).reshape(2)
            present[i] = True
        return cls(pts, present)

    # ---------- Queries ----------
    def __len__(self) -> int:
        return self.n_total

    @property
    def n_total(self) -> int:
        return int(self.points.shape[0])

    @property
    def n_present(self) -> int:
        return int(np.count_nonzero(self.present))

    def present_indices(self) -> IndexArray:
        return np.flatnonzero(self.present)

    def present_points(self) -> Points2D:
        return self.points[self.present]

    def to_optional(self) -> list[Optional[tuple[float, float]]]:
        """Inverse of from_optional (absent slots become None)."""
        return [
            (float(x), float(y)) if ok else None
            for (x, y), ok in zip(self.points, self.present)
        ]

    # ---------- Mutation ----------
    def remove(self, indices: npt.ArrayLike) -> None:
        """Mark the given slots as absent."""
        self.present[np.asarray(indices, dtype=np.intp)] = False

    def restore(self, indices: Optional[npt.ArrayLike] = None) -> None:
        """
        Undo removals: all slots, or only the given ones.
        Slots that were absent at construction stay absent.
        """
        if indices is None:
            self.present[:] = self._initial
            return
        idx = np.asarray(indices, dtype=np.intp)
        self.present[idx] = self._initial[idx]

    def copy(self) -> PointSet:
        other = PointSet(self.points.copy(), self._initial.copy())
        other.present[:] = self.present
        return other
