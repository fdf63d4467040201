"""
Parameter spaces for the elastic distance measures.

The data-driven builders follow the usual Elastic Ensemble ranges:
- ERP: gap penalty in ``linspace(0.2 * std, std, n)``, window in
  ``linspace(0, 0.25, n)`` of the series length
- DTW: window in ``linspace(0, 1, n)`` of the series length

Values are deduplicated (keeping first occurrence) so that every index of
the resulting space decodes to a distinct configuration.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence

import numpy as np

from ..data.series import Dataset
from ..params.space import ParameterDimension, ParamSpace
from ..utils.logging_setup import get_logger
from .dtw import DTWDistance
from .erp import ERPDistance

logger = get_logger(__name__)


def _unique(values: Iterable[Any]) -> List[Any]:
    seen = set()
    unique = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique.append(value)
    return unique


def window_sizes(length: int, max_fraction: float, num_values: int) -> List[int]:
    """
    Distinct integer window sizes from fractions of a series length.

    Args:
        length: Series length
        max_fraction: Largest window as a fraction of ``length``
        num_values: Number of evenly spaced fractions in ``[0, max_fraction]``
    """
    fractions = np.linspace(0.0, max_fraction, num_values)
    return _unique(int(fraction * length) for fraction in fractions)


def build_erp_space(
    penalties: Sequence[float],
    window_sizes: Sequence[int],
    include_full_window: bool = False,
) -> ParamSpace:
    """
    ERP space from explicit values.

    Args:
        penalties: Gap penalty candidates
        window_sizes: Window size candidates
        include_full_window: Add an alternative with an unconstrained
            window (``window_size = -1``) after the banded configurations;
            negative sizes are then left out of the banded alternative

    Returns:
        ParamSpace over ``penalty`` x ``window_size``
    """
    penalties = _unique(float(p) for p in penalties)
    windows = _unique(int(w) for w in window_sizes)
    if not include_full_window:
        return ParamSpace.product(
            ParameterDimension.of(ERPDistance.PENALTY_FLAG, penalties),
            ParameterDimension.of(ERPDistance.WINDOW_SIZE_FLAG, windows),
        )
    full = ParamSpace.product(
        ParameterDimension.of(ERPDistance.PENALTY_FLAG, penalties),
        ParameterDimension.of(ERPDistance.WINDOW_SIZE_FLAG, [-1]),
    )
    # any negative size is the full window
    banded_windows = [w for w in windows if w >= 0]
    if not banded_windows:
        return full
    banded = ParamSpace.product(
        ParameterDimension.of(ERPDistance.PENALTY_FLAG, penalties),
        ParameterDimension.of(ERPDistance.WINDOW_SIZE_FLAG, banded_windows),
    )
    return ParamSpace.union(banded, full)


def build_erp_params(dataset: Dataset, num_values: int = 10) -> ParamSpace:
    """
    ERP space scaled to a dataset.

    Args:
        dataset: Training data (its standard deviation and length set the ranges)
        num_values: Number of candidates per dimension before deduplication

    Returns:
        ParamSpace over ``penalty`` x ``window_size``
    """
    std = dataset.std()
    penalties = np.linspace(0.2 * std, std, num_values).tolist()
    windows = window_sizes(dataset.series_length, 0.25, num_values)
    space = build_erp_space(penalties, windows)
    logger.debug(
        f"ERP space: std={std:.4f}, penalties={len(_unique(penalties))}, "
        f"windows={windows}, size={space.size()}"
    )
    return space


def build_dtw_params(dataset: Dataset, num_values: int = 100) -> ParamSpace:
    """
    DTW space scaled to a dataset.

    Args:
        dataset: Training data (its length sets the window range)
        num_values: Number of window fractions before deduplication

    Returns:
        ParamSpace over ``window_size``
    """
    windows = window_sizes(dataset.series_length, 1.0, num_values)
    space = ParamSpace.product(ParameterDimension.of(DTWDistance.WINDOW_SIZE_FLAG, windows))
    logger.debug(f"DTW space: windows={len(windows)}, size={space.size()}")
    return space
