"""
Edit distance with Real Penalty (ERP).

ERP aligns two series like an edit distance: each step either matches
``a[i]`` with ``b[j]`` (cost ``(a[i] - b[j])²``), or aligns one value
with the gap value ``g`` (cost ``(a[i] - g)²`` or ``(g - b[j])²``).

Cost selection for interior cells is order-sensitive and must not be
rewritten as ``min(...)``: ties and floating-point comparisons resolve
deletion first, then insertion, then match, exactly as below. Golden
values in the test-suite depend on it.
"""

from __future__ import annotations

from typing import Any, ClassVar, List, Sequence

from ..params.param_set import ParamSet
from .base import BandedDistanceMeasure


class ERPDistance(BandedDistanceMeasure):
    """
    Banded ERP distance with early abandoning.

    Example:
        erp = ERPDistance(window_size=1, penalty=1.5)
        erp.distance(a, b)              # exact distance
        erp.distance(a, b, limit=10.0)  # +inf if the distance is >= 10
    """

    name: ClassVar[str] = "erp"
    PENALTY_FLAG: ClassVar[str] = "penalty"

    def __init__(self, window_size: int = -1, penalty: float = 0.0, keep_matrix: bool = False):
        super().__init__(window_size=window_size, keep_matrix=keep_matrix)
        self.penalty = penalty

    @property
    def penalty(self) -> float:
        """Gap value ``g``."""
        return self._penalty

    @penalty.setter
    def penalty(self, value: float) -> None:
        self._penalty = float(value)

    def get_params(self) -> ParamSet:
        params = super().get_params()
        params.add(self.PENALTY_FLAG, self._penalty)
        return params

    def set_params(self, param_set: ParamSet) -> None:
        super().set_params(param_set)
        if self.PENALTY_FLAG in param_set:
            self.penalty = param_set.first(self.PENALTY_FLAG)

    def _prepare(self, a: Sequence[float], b: Sequence[float]) -> List[float]:
        # deletion cost of every b[j] against the gap value
        g = self._penalty
        gaps = []
        for value in b:
            diff = g - value
            gaps.append(diff * diff)
        return gaps

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
        deletion_gaps: List[float] = context
        diff = a_i - self._penalty
        insertion_gap = diff * diff

        for j in range(lo, hi + 1):
            if i == 0:
                if j == 0:
                    cost = 0.0
                else:
                    cost = current[j - 1] + deletion_gaps[j]
            elif j == 0:
                cost = previous[j] + insertion_gap
            else:
                diff = a_i - b[j]
                deletion = current[j - 1] + deletion_gaps[j]
                insertion = previous[j] + insertion_gap
                match = previous[j - 1] + diff * diff
                if match > deletion and deletion < insertion:
                    cost = deletion
                elif match > insertion and insertion < deletion:
                    cost = insertion
                else:
                    cost = match
            current[j] = cost

    def _empty_distance(self, a: Sequence[float], b: Sequence[float]) -> float:
        # every value of the non-empty series is aligned with the gap
        g = self._penalty
        total = 0.0
        for value in list(a) + list(b):
            diff = value - g
            total += diff * diff
        return total
