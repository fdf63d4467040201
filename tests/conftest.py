"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
from typing import Generator, List

import numpy as np
import pytest

from warpgrid.data import Dataset
from warpgrid.params import ParameterDimension, ParamSpace

# Two-instance fixture of length 9 with known ERP distances:
#   window -1, penalty 1.5 -> 182      window -1, penalty 2.0 -> 175
#   window  1, penalty 1.5 -> 189.5    window  1, penalty 2.0 -> 189
SERIES_A: List[float] = [4, 9, 9, 9, 10, 10, 9, 5, 6]
SERIES_B: List[float] = [3, 2, 2, 10, 7, 5, 2, 1, 5]


def build_random_dataset(
    seed: int, low: float, high: float, length: int, count: int, num_classes: int = 2
) -> Dataset:
    """Dataset of uniformly random univariate series with random labels."""
    rng = np.random.default_rng(seed)
    data = rng.uniform(low, high, size=(count, length))
    labels = rng.integers(0, num_classes, size=count).tolist()
    return Dataset.from_arrays(data, labels)


@pytest.fixture
def golden_pair() -> tuple[List[float], List[float]]:
    """The two reference series with known ERP distances."""
    return list(SERIES_A), list(SERIES_B)


@pytest.fixture
def golden_dataset() -> Dataset:
    """The reference pair as a labelled dataset."""
    return Dataset.from_arrays([SERIES_A, SERIES_B], [0, 1])


@pytest.fixture
def random_dataset() -> Dataset:
    """Small random dataset for parity checks."""
    return build_random_dataset(seed=0, low=-5, high=5, length=16, count=8)


@pytest.fixture
def window_space() -> ParamSpace:
    """penalty ∈ {1.5, 2.0} x window ∈ {unconstrained, constrained(size ∈ {1, 3, 5})}."""
    return ParamSpace.product(
        ParameterDimension.of("penalty", [1.5, 2.0]),
        ParameterDimension.of(
            "window",
            ["unconstrained", "constrained"],
            nested={
                "constrained": ParamSpace.product(
                    ParameterDimension.of("window_size", [1, 3, 5]),
                )
            },
        ),
    )


@pytest.fixture
def restore_warpgrid_logger() -> Generator[None, None, None]:
    """Undo handler and propagation changes made by setup_logging."""
    logger = logging.getLogger("warpgrid")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
