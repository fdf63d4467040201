"""
Unit tests for DistanceSweep.

Tests:
- Golden distances over a penalty x window grid
- Best-result selection and tie handling
- Pruning against a limit
- Empty search spaces
- Sweep logging
"""

import logging
import math

import pytest

from warpgrid.distances import DTWDistance, ERPDistance
from warpgrid.exceptions import EmptySearchSpaceError
from warpgrid.params import (
    GridSearchIterator,
    ParameterDimension,
    ParamSpace,
    RandomSearchIterator,
)
from warpgrid.search import DistanceSweep, SweepResult


@pytest.fixture
def golden_space() -> ParamSpace:
    return ParamSpace.product(
        ParameterDimension.of("penalty", [1.5, 2.0]),
        ParameterDimension.of("window_size", [-1, 1]),
    )


class TestDistanceSweep:
    """Tests for running a sweep."""

    def test_golden_grid(self, golden_pair, golden_space) -> None:
        """Test golden distances over the grid."""
        a, b = golden_pair
        sweep = DistanceSweep(ERPDistance.from_param_set, GridSearchIterator(golden_space))
        results = sweep.run(a, b)

        assert [result.distance for result in results] == [182, 175, 189.5, 189]
        assert [result.index for result in results] == [0, 1, 2, 3]
        assert results[2].params == {"penalty": 1.5, "window_size": 1}
        assert sweep.results == results

    def test_best(self, golden_pair, golden_space) -> None:
        """Test best() returns the smallest distance."""
        a, b = golden_pair
        sweep = DistanceSweep(ERPDistance.from_param_set, GridSearchIterator(golden_space))
        sweep.run(a, b)
        best = sweep.best()
        assert isinstance(best, SweepResult)
        assert best.index == 1
        assert best.distance == 175
        assert best.params == {"penalty": 2.0, "window_size": -1}

    def test_best_ties_keep_earliest(self, golden_pair) -> None:
        """Test best() keeps the earliest of equal results."""
        a, _ = golden_pair
        space = ParamSpace.product(ParameterDimension.of("window_size", [0, 1, 2]))
        sweep = DistanceSweep(DTWDistance.from_param_set, GridSearchIterator(space))
        sweep.run(a, a)
        assert [result.distance for result in sweep.results] == [0.0, 0.0, 0.0]
        assert sweep.best().index == 0

    def test_limit_prunes(self, golden_pair, golden_space) -> None:
        """Test results at or above the limit are pruned."""
        a, b = golden_pair
        sweep = DistanceSweep(ERPDistance.from_param_set, GridSearchIterator(golden_space))
        results = sweep.run(a, b, limit=185)
        assert [result.distance for result in results] == [182, 175, math.inf, math.inf]

    def test_random_search_indices(self, golden_pair, golden_space) -> None:
        """Test random search distances match their indices."""
        a, b = golden_pair
        expected = {0: 182, 1: 175, 2: 189.5, 3: 189}
        sweep = DistanceSweep(ERPDistance.from_param_set, RandomSearchIterator(golden_space, seed=4))
        results = sweep.run(a, b)
        assert sorted(result.index for result in results) == [0, 1, 2, 3]
        for result in results:
            assert result.distance == expected[result.index]

    def test_runs_accumulate(self, golden_pair, golden_space) -> None:
        """Test results accumulate across runs."""
        a, b = golden_pair
        iterator = GridSearchIterator(golden_space)
        iterator.set_num_iterations(2)
        sweep = DistanceSweep(ERPDistance.from_param_set, iterator)
        sweep.run(a, b)
        # the iterator is exhausted; a second run evaluates nothing
        assert sweep.run(a, b) == []
        assert len(sweep.results) == 2


class TestEmptySweep:
    """Tests for sweeps over empty spaces."""

    def test_best_without_results(self) -> None:
        """Test best() after evaluating nothing."""
        space = ParamSpace.product(
            ParameterDimension.of("penalty", [1.5]),
            ParameterDimension(name="window_size", disabled=True),
        )
        sweep = DistanceSweep(ERPDistance.from_param_set, GridSearchIterator(space))
        assert sweep.run([1.0], [2.0]) == []
        with pytest.raises(EmptySearchSpaceError, match="no configurations"):
            sweep.best()

    def test_best_before_run(self, golden_space) -> None:
        """Test best() before any run."""
        sweep = DistanceSweep(ERPDistance.from_param_set, GridSearchIterator(golden_space))
        with pytest.raises(EmptySearchSpaceError):
            sweep.best()


class TestSweepLogging:
    """Tests for sweep log output."""

    def test_summary_logged(self, caplog, golden_pair, golden_space) -> None:
        """Test the sweep summary and timing are logged."""
        a, b = golden_pair
        sweep = DistanceSweep(ERPDistance.from_param_set, GridSearchIterator(golden_space))
        with caplog.at_level(logging.DEBUG, logger="warpgrid"):
            sweep.run(a, b, limit=185)

        summary = [r for r in caplog.records if r.name == "warpgrid.search"][-1]
        assert "Sweep evaluated 4 configurations (2 pruned)" in summary.getMessage()

        timing = [r for r in caplog.records if r.name == "warpgrid.perf"][-1]
        assert timing.data["operation"] == "distance_sweep"
        assert timing.data["configs"] == 4
        assert timing.data["pruned"] == 2
        assert timing.data["sweep"] in summary.getMessage()
