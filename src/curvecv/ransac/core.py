# Andy Zhao
"""
Generic RANSAC detector (primitive-agnostic).

RANSAC overview:
- Randomly draw a *minimal* set of unique, present points
- Fit a candidate primitive exactly through that draw
- Score the candidate by counting present points within distance tau
- Keep the candidate with the most inliers (first one wins on ties),
  but only if it reaches the minimum support count
- Refit using all inliers of the best candidate (least squares) to get the final primitive
- Optionally claim (remove) the inliers so the next call finds the next primitive

Uses the CurveFitter Protocol from types.py:
    the same loop works for lines, circles and ellipses
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Generic, Optional

import numpy as np

from ..types import C, CurveFitter, IndexArray, Points2D, RansacResult
from .errors import FinalFitError, InsufficientPointsError
from .point_set import PointSet
from .sampler import UniqueSampler

logger = logging.getLogger(__name__)
_RANSAC_DEBUG = os.environ.get("CURVECV_RANSAC_DEBUG", "0") == "1"


@dataclass(frozen=True)
class RansacParams:
    """
    Parameters for the RANSAC search.

    max_iterations:
      - Number of draws per extraction. The budget is fixed unless confidence is set.
    distance_threshold:
      - A point is an inlier if |distance| < distance_threshold.
    min_support_count:
      - Candidates with fewer inliers are never accepted.
    max_draw_attempts:
      - How often a draw rejected by the fitter's precondition is redrawn
        before the iteration is skipped.
    confidence:
      - None: run all max_iterations (default).
      - p in (0, 1): adaptive stopping, stop once a better-than-p chance of
        having drawn one all-inlier sample is reached.
    """
    max_iterations: int = 1000
    distance_threshold: float = 2.0
    min_support_count: int = 100
    max_draw_attempts: int = 100
    confidence: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError("RansacParams.max_iterations must be >= 1")
        if not self.distance_threshold > 0.0:
            raise ValueError("RansacParams.distance_threshold must be > 0")
        if self.min_support_count < 0:
            raise ValueError("RansacParams.min_support_count must be >= 0")
        if self.max_draw_attempts < 1:
            raise ValueError("RansacParams.max_draw_attempts must be >= 1")
        if self.confidence is not None and not (0.0 < self.confidence < 1.0):
            raise ValueError("RansacParams.confidence must be in (0, 1)")


def _required_iter_for_confidence(
        *,
        p_all_inliers: float,
        inlier_ratio: float,
        sample_size: int,
) -> int:
    """
    Compute the number of RANSAC iterations needed so that the probability
    of having drawn at least ONE all-inlier minimal sample is >= p_all_inliers.

    inlier ratio w = (# inliers) / N, minimal sample s,
    - P(all-inliers) = w^s
    - P(at-least-once-all-inliers in k draws) = 1 - (1 - w^s)^k >= p

    Formula:
       k >= log(1 - p) / log(1 - w^s)

    Edge cases:
     - w == 0  -> impossible, return "infinite-ish" (capped by max_iterations)
     - w == 1  -> 1 iteration is enough
    """
    # Clamp inputs to avoid log(0)
    p = float(np.clip(p_all_inliers, 1e-12, 1.0 - 1e-12))
    w = float(np.clip(inlier_ratio, 0.0, 1.0))
    s = int(sample_size)

    if s <= 0:
        raise ValueError("sample_size must be >= 1")

    if w >= 1.0:
        return 1

    if w <= 0.0:
        return int(1e9)

    # If w^s is extremely tiny, log(1 - w^s) close to 0
    w_to_s = float(np.clip(w ** s, 1e-12, 1.0 - 1e-12))

    k = int(np.ceil(np.log(1 - p) / np.log(1 - w_to_s)))
    return max(1, k)


class RansacDetector(Generic[C]):
    """
    Find the best-supported primitive in a point set.

    For each extraction:
        1) result = detector.find_next(point_set)          # claims the inliers
        2) result is None  -> no (further) primitive present
        3) repeat on the same point_set to find the next primitive

    fitter:
      CurveFitter (LineFitter / CircleFitter / EllipseFitter or any custom one)
    params:
      RansacParams
    seed:
      RNG seed for reproducible draws (None = nondeterministic)
    """

    def __init__(
        self,
        fitter: CurveFitter[C],
        params: Optional[RansacParams] = None,
        *,
        seed: Optional[int] = None,
    ) -> None:
        self.fitter = fitter
        self.params = params if params is not None else RansacParams()
        self._sampler = UniqueSampler(fitter.min_samples, np.random.default_rng(seed))

    # ---------- RNG ----------
    @property
    def rng(self) -> np.random.Generator:
        return self._sampler.rng

    def set_random_seed(self, seed: Optional[int]) -> None:
        """
        Reset the random generator with the given seed, to obtain repeatable results.
        """
        self._sampler.rng = np.random.default_rng(seed)

    @property
    def min_samples(self) -> int:
        return self.fitter.min_samples

    # ---------- Inlier classification ----------
    def _inlier_mask(self, curve: C, point_set: PointSet) -> np.ndarray:
        """
        Boolean mask over all slots: present AND |distance| < tau.
        Absent slots are never evaluated.
        """
        mask = np.zeros((point_set.n_total,), dtype=bool)
        idx = point_set.present_indices()
        if idx.size == 0:
            return mask
        d = np.abs(np.asarray(curve.distance(point_set.points[idx]), dtype=np.float64))
        mask[idx] = d < self.params.distance_threshold
        return mask

    def count_inliers(self, curve: C, point_set: PointSet) -> int:
        return int(np.count_nonzero(self._inlier_mask(curve, point_set)))

    def collect_inliers(
        self, curve: C, point_set: PointSet, remove_inliers: bool = False,
    ) -> tuple[IndexArray, Points2D]:
        """
        Return (indices, points) of the inliers of curve, optionally marking them absent.
        """
        idx = np.flatnonzero(self._inlier_mask(curve, point_set))
        pts = point_set.points[idx].copy()
        if remove_inliers:
            point_set.remove(idx)
        return idx, pts

    # ---------- Sampling ----------
    def _draw(self, point_set: PointSet) -> Optional[tuple[IndexArray, Points2D]]:
        """
        Draw a minimal sample that passes the fitter's precondition.
        Returns None if max_draw_attempts draws were all rejected.
        """
        for _ in range(self.params.max_draw_attempts):
            idx, pts = self._sampler.draw_from(point_set)
            if self.fitter.accept_draw(pts):
                return idx, pts
        return None

    # ---------- Main RANSAC Loop ----------
    def find_next(
        self,
        point_set: PointSet,
        remove_inliers: bool = True,
        *,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> Optional[RansacResult[C]]:
        """
        Extract the best-supported primitive from the present points.

        Inputs:
        - point_set: points with presence mask; inliers are marked absent if remove_inliers
        - should_stop: optional callable checked once per iteration (cancellation)

        Returns:
        - RansacResult, or None if no candidate reached min_support_count.

        Raises:
        - InsufficientPointsError if fewer than min_samples points are present
        - FinalFitError if the refit on the inliers of the best candidate fails
        """
        params = self.params
        k = self.min_samples
        n_present = point_set.n_present

        # ---------- Precondition ----------
        # Fewer present points than k: no draw is possible
        if n_present < k:
            raise InsufficientPointsError(n_present, k)

        # Track the best candidate
        best_idx: Optional[IndexArray] = None
        best_draw: Optional[Points2D] = None
        best_primitive: Optional[C] = None
        best_score = -1

        target_iters = params.max_iterations
        iters_run = 0

        i = 0
        while i < params.max_iterations and i < target_iters:
            if should_stop is not None and should_stop():
                logger.info("RANSAC stopped by caller after %d iterations", iters_run)
                break
            iters_run = i + 1
            i += 1

            drawn = self._draw(point_set)
            if drawn is None:
                continue
            idx, pts = drawn

            # Fit from minimal sample, None if degenerate
            primitive = self.fitter.fit_minimal(pts)
            if primitive is None:
                continue

            score = self.count_inliers(primitive, point_set)

            # Strictly better only: ties keep the first candidate found
            if score >= params.min_support_count and score > best_score:
                best_idx = idx
                best_draw = pts
                best_primitive = primitive
                best_score = score

                if params.confidence is not None:
                    iter_needed = _required_iter_for_confidence(
                        p_all_inliers=params.confidence,
                        inlier_ratio=best_score / float(n_present),
                        sample_size=k,
                    )
                    target_iters = min(target_iters, max(iter_needed, iters_run))

                if _RANSAC_DEBUG:
                    logger.debug(
                        "better candidate at iteration %d: score=%d/%d, target_iters=%d, %s",
                        iters_run, best_score, n_present, target_iters, primitive,
                    )

        # No candidate reached the minimum support: valid outcome, not an error
        if best_primitive is None or best_draw is None or best_idx is None:
            logger.info(
                "no primitive found after %d iterations (%d present points, min support %d)",
                iters_run, n_present, params.min_support_count,
            )
            return None

        # ---------- Refinement ----------
        inlier_idx, inliers = self.collect_inliers(best_primitive, point_set, remove_inliers)
        primitive_final = self.fitter.fit_final(inliers)

        if primitive_final is None:
            logger.warning(
                "final fit failed on %d inliers of %s", inliers.shape[0], best_primitive,
            )
            raise FinalFitError(
                draw=best_draw,
                draw_indices=best_idx,
                primitive_init=best_primitive,
                score=best_score,
                inliers=inliers,
                inlier_indices=inlier_idx,
            )

        logger.info(
            "found %s with %d inliers (%d iterations)", primitive_final, best_score, iters_run,
        )
        # The result is immutable, arrays included
        for arr in (best_draw, best_idx, inliers, inlier_idx):
            arr.setflags(write=False)
        return RansacResult(
            draw=best_draw,
            draw_indices=best_idx,
            primitive_init=best_primitive,
            primitive_final=primitive_final,
            score=best_score,
            inliers=inliers,
            inlier_indices=inlier_idx,
            iterations=iters_run,
            threshold=float(params.distance_threshold),
        )

    def find_all(
        self,
        point_set: PointSet,
        max_count: Optional[int] = None,
    ) -> list[RansacResult[C]]:
        """
        Sequential extraction: call find_next (removing inliers) until no further
        primitive is found, too few points remain, or max_count results were found.

        A failed final fit also ends the extraction: the points claimed by that
        candidate are restored and the results found so far are returned.
        """
        results: list[RansacResult[C]] = []
        while max_count is None or len(results) < max_count:
            if point_set.n_present < self.min_samples:
                break
            try:
                result = self.find_next(point_set, remove_inliers=True)
            except FinalFitError as err:
                point_set.restore(err.inlier_indices)
                logger.warning("stopping after %d results: %s", len(results), err)
                break
            if result is None:
                break
            results.append(result)
            if result.inlier_indices.size == 0:
                # nothing was claimed, the next call would find the same primitive
                break
        return results
