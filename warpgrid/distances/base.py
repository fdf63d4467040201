"""
Distance measure base classes.

BandedDistanceMeasure runs the shared dynamic-programming loop used by the
elastic measures:
- rows of the cost matrix are computed one at a time over the first
  series, keeping only two rolling rows (previous, current)
- a window (band) restricts each row to cells with ``|i - j| <= window``;
  cells outside the band cost ``+inf``
- early abandoning: once every cell of a completed row is ``>= limit``
  the final cost cannot be below ``limit`` (costs only grow along a
  path), so ``+inf`` is returned without computing further rows
- ``keep_matrix=True`` retains every row for inspection

Subclasses fill the band of a single row.
"""

from __future__ import annotations

import math
import operator
from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, Optional, Sequence

import numpy as np

from ..data.series import as_series
from ..params.param_set import ParamSet

INF = math.inf


class DistanceMeasure(ABC):
    """
    A dissimilarity between two sequences.

    ``distance`` returns a float >= 0, or ``+inf`` when the distance is
    known to be >= ``limit`` (a pruned result, not a failure).
    """

    name: ClassVar[str] = "distance"

    @abstractmethod
    def distance(self, a: Any, b: Any, limit: float = INF) -> float:
        """Distance between ``a`` and ``b``, or ``+inf`` if it is >= ``limit``."""

    @abstractmethod
    def get_params(self) -> ParamSet:
        """Current parameters as a ParamSet."""

    @abstractmethod
    def set_params(self, param_set: ParamSet) -> None:
        """Apply every known flag found in ``param_set``."""

    @classmethod
    def from_param_set(cls, param_set: ParamSet, **kwargs: Any) -> "DistanceMeasure":
        """Build a measure configured from a decoded ParamSet."""
        measure = cls(**kwargs)
        measure.set_params(param_set)
        return measure

    def __call__(self, a: Any, b: Any, limit: float = INF) -> float:
        return self.distance(a, b, limit)

    def __repr__(self) -> str:
        params = ", ".join(f"{name}={values[0]!r}" for name, values in self.get_params().items())
        return f"{type(self).__name__}({params})"


class BandedDistanceMeasure(DistanceMeasure):
    """
    Dynamic-programming distance over a banded cost matrix.

    Args:
        window_size: Max ``|i - j|`` of admissible cells; negative means
            unconstrained
        keep_matrix: Retain the full cost matrix of the last call in
            ``matrix`` (diagnostics; makes the instance unsafe to share)
    """

    WINDOW_SIZE_FLAG: ClassVar[str] = "window_size"

    def __init__(self, window_size: int = -1, keep_matrix: bool = False):
        self.window_size = window_size
        self.keep_matrix = keep_matrix
        self._matrix: Optional[np.ndarray] = None

    @property
    def window_size(self) -> int:
        return self._window_size

    @window_size.setter
    def window_size(self, value: int) -> None:
        if isinstance(value, bool):
            raise TypeError(f"window_size must be an integer, got {value!r}")
        self._window_size = operator.index(value)

    @property
    def matrix(self) -> Optional[np.ndarray]:
        """Cost matrix of the last call (``keep_matrix=True`` only)."""
        return self._matrix

    def get_params(self) -> ParamSet:
        return ParamSet({self.WINDOW_SIZE_FLAG: self._window_size})

    def set_params(self, param_set: ParamSet) -> None:
        if self.WINDOW_SIZE_FLAG in param_set:
            self.window_size = int(param_set.first(self.WINDOW_SIZE_FLAG))

    def distance(self, a: Any, b: Any, limit: float = INF) -> float:
        """
        Banded distance with early abandoning.

        Args:
            a: First series (rows of the cost matrix)
            b: Second series (columns of the cost matrix)
            limit: Abandon once the result is known to be >= limit

        Returns:
            The distance, or ``+inf`` if it is >= ``limit``
        """
        first = as_series(a).tolist()
        second = as_series(b).tolist()
        len_a = len(first)
        len_b = len(second)
        self._matrix = None

        if len_a == 0 or len_b == 0:
            result = self._empty_distance(first, second)
            return result if result < limit else INF

        band = self._window_size if self._window_size >= 0 else max(len_a, len_b)
        context = self._prepare(first, second)

        rows: Optional[List[List[float]]] = [] if self.keep_matrix else None
        previous = [INF] * len_b
        current = [INF] * len_b

        for i in range(len_a):
            if rows is not None:
                previous = current
                current = [INF] * len_b
                rows.append(current)
            else:
                previous, current = current, previous

            lo = max(0, i - band)
            hi = min(len_b - 1, i + band)
            if lo > hi:
                # no admissible cell in this row
                self._retain(rows, len_a, len_b)
                return INF

            # cells bordering the band hold stale values from two rows back
            if lo > 0:
                current[lo - 1] = INF
            if hi + 1 < len_b:
                current[hi + 1] = INF

            self._fill_row(i, first[i], second, previous, current, lo, hi, context)

            if not any(cost < limit for cost in current[lo:hi + 1]):
                self._retain(rows, len_a, len_b)
                return INF

        self._retain(rows, len_a, len_b)
        result = current[len_b - 1]
        return result if result < limit else INF

    def _retain(self, rows: Optional[List[List[float]]], len_a: int, len_b: int) -> None:
        if rows is None:
            return
        # rows never reached because of abandoning stay +inf
        while len(rows) < len_a:
            rows.append([INF] * len_b)
        self._matrix = np.array(rows, dtype=np.float64)

    def _prepare(self, a: Sequence[float], b: Sequence[float]) -> Any:
        """Per-call values shared by every row (e.g. cached gap costs)."""
        return None

    @abstractmethod
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
        """Write the costs of cells ``lo..hi`` (inclusive) of row ``i`` into ``current``."""

    @abstractmethod
    def _empty_distance(self, a: Sequence[float], b: Sequence[float]) -> float:
        """Distance when at least one series is empty."""

