"""
Distance sweeps - evaluate a measure across a parameter search.

A sweep walks a search iterator. For every configuration it builds a
distance measure and applies it to a pair of series. Each run gets its own
sweep ID for log correlation and is timed on the perf logger.

Example:
    sweep = DistanceSweep(ERPDistance.from_param_set, GridSearchIterator(space))
    results = sweep.run(a, b)
    best = sweep.best()  # SweepResult with the smallest distance
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List

from ..distances.base import INF, DistanceMeasure
from ..exceptions import EmptySearchSpaceError
from ..params.iteration import ParamSearchIterator
from ..params.param_set import ParamSet
from ..utils.logging_setup import get_logger
from ..utils.perf_logger import log_timing
from ..utils.trace_context import new_sweep

logger = get_logger(__name__)

MeasureFactory = Callable[[ParamSet], DistanceMeasure]


@dataclass
class SweepResult:
    """Distance of one configuration."""

    index: int  # index of the configuration in the parameter space
    params: ParamSet
    distance: float


class DistanceSweep:
    """
    Evaluate one pair of series under every configuration of a search.

    Args:
        measure_factory: Builds a configured measure from a ParamSet
            (e.g. ``ERPDistance.from_param_set``)
        iterator: Search iterator to consume; not reusable afterwards
    """

    def __init__(self, measure_factory: MeasureFactory, iterator: ParamSearchIterator):
        self._measure_factory = measure_factory
        self._iterator = iterator
        self._results: List[SweepResult] = []

    @property
    def results(self) -> List[SweepResult]:
        return list(self._results)

    def run(self, a: Any, b: Any, limit: float = INF) -> List[SweepResult]:
        """
        Compute the distance between ``a`` and ``b`` for each configuration.

        Args:
            a: First series
            b: Second series
            limit: Early-abandon limit passed to every distance call

        Returns:
            Results in iteration order
        """
        results: List[SweepResult] = []
        with new_sweep() as sweep_id:
            with log_timing("distance_sweep") as ctx:
                for params in self._iterator:
                    measure = self._measure_factory(params)
                    distance = measure.distance(a, b, limit)
                    results.append(SweepResult(self._iterator.last_index, params, distance))
                ctx["configs"] = len(results)
                ctx["pruned"] = sum(1 for result in results if result.distance == INF)

            logger.info(
                f"[{sweep_id}] Sweep evaluated {ctx['configs']} configurations "
                f"({ctx['pruned']} pruned)"
            )

        self._results.extend(results)
        return results

    def best(self) -> SweepResult:
        """
        Result with the smallest distance (earliest wins ties).

        Raises:
            EmptySearchSpaceError: If no configuration has been evaluated
        """
        if not self._results:
            raise EmptySearchSpaceError("Sweep produced no configurations to choose from")
        best = self._results[0]
        for result in self._results[1:]:
            if result.distance < best.distance:
                best = result
        return best
