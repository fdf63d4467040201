"""Tests for nearest neighbour search and pairwise distances."""

import math

import pytest

from warpgrid.distances import DTWDistance, ERPDistance, nearest_neighbour, pairwise_distances


class TestNearestNeighbour:
    """Tests for nearest_neighbour."""

    def test_finds_identical_series(self, golden_pair) -> None:
        """Test an identical candidate is the nearest."""
        a, b = golden_pair
        assert nearest_neighbour(a, [b, a], ERPDistance(penalty=1.5)) == (1, 0.0)

    def test_returns_distance(self, golden_pair) -> None:
        """Test the nearest distance is returned."""
        a, b = golden_pair
        assert nearest_neighbour(a, [b], ERPDistance(penalty=2.0)) == (0, 175)

    def test_ties_keep_earliest(self, golden_pair) -> None:
        """Test equal distances keep the earliest candidate."""
        a, b = golden_pair
        assert nearest_neighbour(a, [b, list(b), b], ERPDistance(penalty=1.5)) == (0, 182)

    def test_matches_exhaustive_search(self, random_dataset) -> None:
        """Test pruned search matches exhaustive search."""
        query, *candidates = list(random_dataset)
        measure = ERPDistance(window_size=3, penalty=0.5)
        distances = [measure.distance(query, candidate) for candidate in candidates]
        index, distance = nearest_neighbour(query, candidates, measure)
        assert distance == min(distances)
        assert index == distances.index(min(distances))

    def test_no_candidates(self) -> None:
        """Test an empty candidate list is rejected."""
        with pytest.raises(ValueError, match="at least one candidate"):
            nearest_neighbour([1.0], [], DTWDistance())

    def test_all_unreachable(self) -> None:
        """Candidates outside the window are never closer than +inf."""
        index, distance = nearest_neighbour([1.0], [[1.0, 2.0, 3.0]], DTWDistance(window_size=0))
        assert index == 0
        assert distance == math.inf


class TestPairwiseDistances:
    """Tests for pairwise_distances."""

    def test_symmetric_with_zero_diagonal(self, golden_dataset) -> None:
        """Test the pairwise matrix diagonal is zero."""
        measure = ERPDistance(penalty=1.5)
        matrix = pairwise_distances(list(golden_dataset), measure)
        expected = measure.distance(golden_dataset[1], golden_dataset[0])
        assert matrix == [[0.0, expected], [expected, 0.0]]

    def test_random_dataset(self, random_dataset) -> None:
        """Test pairwise distances match direct calls."""
        series = list(random_dataset)
        measure = DTWDistance(window_size=2)
        matrix = pairwise_distances(series, measure)
        assert len(matrix) == len(series)
        for i in range(len(series)):
            assert matrix[i][i] == 0.0
            for j in range(i):
                assert matrix[i][j] == matrix[j][i] == measure.distance(series[i], series[j])
