"""
Dynamic Time Warping (DTW) distance.

Each cell costs ``(a[i] - b[j])²`` plus the cheapest of its three
predecessors (diagonal, above, left). The first row and column can only
be reached along the edge.
"""

from __future__ import annotations

from typing import Any, ClassVar, List, Sequence

from .base import INF, BandedDistanceMeasure


class DTWDistance(BandedDistanceMeasure):
    """Banded DTW with early abandoning."""

    name: ClassVar[str] = "dtw"

    def _fill_row(
        self,
        i: int,
        a_i: float,
        b: Sequence[float],
        previous: List[float],
        current: List[float],
        lo: int,
        hi: int,
        context: Any,
    ) -> None:
        for j in range(lo, hi + 1):
            diff = a_i - b[j]
            cost = diff * diff
            if i == 0:
                if j > 0:
                    cost += current[j - 1]
            elif j == 0:
                cost += previous[j]
            else:
                cost += min(previous[j - 1], previous[j], current[j - 1])
            current[j] = cost

    def _empty_distance(self, a: Sequence[float], b: Sequence[float]) -> float:
        # a non-empty series cannot be warped onto an empty one
        if len(a) == 0 and len(b) == 0:
            return 0.0
        return INF
