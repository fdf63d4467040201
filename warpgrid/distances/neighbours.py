"""
Nearest neighbour search with early abandoning.

The best distance found so far is passed as ``limit`` to every further
call, so candidates that cannot beat it are abandoned after a few rows.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

from .base import INF, DistanceMeasure


def nearest_neighbour(
    query: Any,
    candidates: Sequence[Any],
    measure: DistanceMeasure,
) -> Tuple[int, float]:
    """
    Find the candidate closest to ``query``.

    Args:
        query: Series to classify
        candidates: Series to search
        measure: Distance measure

    Returns:
        (index, distance) of the nearest candidate; ties keep the earliest

    Raises:
        ValueError: If there are no candidates
    """
    if len(candidates) == 0:
        raise ValueError("nearest_neighbour requires at least one candidate")

    best_index = 0
    best_distance = INF
    for index, candidate in enumerate(candidates):
        distance = measure.distance(query, candidate, best_distance)
        if distance < best_distance:
            best_index = index
            best_distance = distance
    return best_index, best_distance


def pairwise_distances(series: Sequence[Any], measure: DistanceMeasure) -> List[List[float]]:
    """
    Full distance matrix between every pair of ``series`` (no abandoning).

    The matrix is filled as ``measure(series[i], series[j])`` for ``j < i``
    and mirrored, with zeros on the diagonal.
    """
    n = len(series)
    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i):
            distance = measure.distance(series[i], series[j])
            matrix[i][j] = distance
            matrix[j][i] = distance
    return matrix
