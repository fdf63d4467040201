"""
Search iterators over an indexed parameter space.

Iterators hold the only mutable state of a search (the cursor). The
IndexedParameterSpace they read from is immutable and may be shared by
many iterators, one per worker.

Usage:
    iterator = GridSearchIterator(space)
    while iterator.has_next():
        params = next(iterator)
        ...

    # or simply
    for params in GridSearchIterator(space):
        ...
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np

from ..config.models import SearchConfig
from ..exceptions import ConfigurationError, InvalidIterationCountError
from ..utils.logging_setup import get_logger
from .indexed import IndexedParameterSpace
from .param_set import ParamSet
from .space import ParamSpace

logger = get_logger(__name__)

SpaceLike = Union[ParamSpace, IndexedParameterSpace]


def _as_indexed(space: SpaceLike) -> IndexedParameterSpace:
    if isinstance(space, IndexedParameterSpace):
        return space
    return IndexedParameterSpace.build(space)


class ParamSearchIterator(ABC):
    """
    Forward-only cursor producing ParamSets.

    ``num_iterations`` defaults to the size of the space. It may be lowered
    to sub-sample a search, or raised beyond the size; positions at or past
    the size then fail fast with ParameterIndexError.
    """

    def __init__(self, space: SpaceLike):
        self._indexed_space = _as_indexed(space)
        self._position = 0
        self._num_iterations = self._indexed_space.size()
        self._last_index: Optional[int] = None

    @property
    def indexed_space(self) -> IndexedParameterSpace:
        return self._indexed_space

    @property
    def param_space(self) -> ParamSpace:
        return self._indexed_space.param_space

    @property
    def position(self) -> int:
        """Number of configurations produced so far."""
        return self._position

    @property
    def num_iterations(self) -> int:
        return self._num_iterations

    @property
    def last_index(self) -> Optional[int]:
        """Space index of the configuration produced last."""
        return self._last_index

    def set_num_iterations(self, num_iterations: int) -> None:
        """
        Set how many configurations the iterator produces.

        Raises:
            InvalidIterationCountError: If ``num_iterations`` is negative or
                not an integer
        """
        if isinstance(num_iterations, bool):
            raise InvalidIterationCountError(f"num_iterations must be an integer, got {num_iterations!r}")
        try:
            num_iterations = operator.index(num_iterations)
        except TypeError:
            raise InvalidIterationCountError(
                f"num_iterations must be an integer, got {num_iterations!r}"
            ) from None
        if num_iterations < 0:
            raise InvalidIterationCountError(f"num_iterations must be >= 0, got {num_iterations}")
        self._num_iterations = num_iterations

    def has_next(self) -> bool:
        return self._position < self._num_iterations

    @abstractmethod
    def _next_index(self) -> int:
        """Space index of the configuration at the current position."""
        ...

    def __iter__(self) -> "ParamSearchIterator":
        return self

    def __next__(self) -> ParamSet:
        if not self.has_next():
            raise StopIteration
        # decode before advancing so a failed decode leaves the cursor put
        index = self._next_index()
        param_set = self._indexed_space.get(index)
        self._last_index = index
        self._position += 1
        return param_set

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(position={self._position}, "
            f"num_iterations={self._num_iterations}, size={self._indexed_space.size()})"
        )


class GridSearchIterator(ParamSearchIterator):
    """Produces configurations in index order: get(0), get(1), ..."""

    def _next_index(self) -> int:
        return self._position


class RandomSearchIterator(ParamSearchIterator):
    """
    Produces configurations at random indices.

    Without replacement (default) no configuration repeats and the search
    ends after ``min(num_iterations, size)`` configurations, including
    when the count is changed mid-search. With replacement exactly
    ``num_iterations`` indices are drawn.

    Args:
        space: Space to search
        num_iterations: Number of draws (defaults to the size of the space)
        seed: Seed or numpy Generator, for reproducible searches
        with_replacement: Allow the same configuration more than once
    """

    def __init__(
        self,
        space: SpaceLike,
        num_iterations: Optional[int] = None,
        seed: Union[int, np.random.Generator, None] = None,
        with_replacement: bool = False,
    ):
        super().__init__(space)
        self._rng = seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)
        self._with_replacement = with_replacement
        self._order: Optional[np.ndarray] = None
        if num_iterations is not None:
            self.set_num_iterations(num_iterations)

    @property
    def with_replacement(self) -> bool:
        return self._with_replacement

    def set_num_iterations(self, num_iterations: int) -> None:
        """
        Set how many configurations the iterator produces.

        Once the search has started, a raised count extends the draw order
        with indices not drawn yet; already produced positions keep their
        indices.

        Raises:
            InvalidIterationCountError: If ``num_iterations`` is negative or
                not an integer
        """
        super().set_num_iterations(num_iterations)
        if self._order is None or self._with_replacement:
            return
        target = min(self._num_iterations, self._indexed_space.size())
        if target <= len(self._order):
            return
        unused = np.setdiff1d(np.arange(self._indexed_space.size()), self._order)
        extra = self._rng.choice(unused, size=target - len(self._order), replace=False)
        self._order = np.concatenate([self._order, extra])
        logger.debug(f"Extended random order to {target} of {self._indexed_space.size()} indices")

    def has_next(self) -> bool:
        if not super().has_next():
            return False
        if self._with_replacement:
            return self._indexed_space.size() > 0
        if self._order is not None:
            return self._position < len(self._order)
        return self._position < self._indexed_space.size()

    def _next_index(self) -> int:
        size = self._indexed_space.size()
        if self._with_replacement:
            return int(self._rng.integers(0, size))
        if self._order is None:
            # drawn lazily so set_num_iterations can still change the count
            count = min(self._num_iterations, size)
            self._order = self._rng.choice(size, size=count, replace=False)
        return int(self._order[self._position])


def build_iterator(space: SpaceLike, config: Optional[SearchConfig] = None) -> ParamSearchIterator:
    """
    Build the iterator described by a search configuration.

    Args:
        space: Space to search
        config: Search settings (defaults to an exhaustive grid)

    Returns:
        GridSearchIterator or RandomSearchIterator

    Raises:
        ConfigurationError: If the search method is unknown
    """
    config = config or SearchConfig()
    iterator: ParamSearchIterator
    if config.method == "grid":
        iterator = GridSearchIterator(space)
        if config.num_iterations is not None:
            iterator.set_num_iterations(config.num_iterations)
    elif config.method == "random":
        iterator = RandomSearchIterator(
            space,
            num_iterations=config.num_iterations,
            seed=config.seed,
            with_replacement=config.with_replacement,
        )
    else:
        raise ConfigurationError(f"Unknown search method: {config.method!r}")

    logger.debug(f"Built {iterator!r}")
    return iterator
