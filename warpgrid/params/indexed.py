"""
Indexed parameter space - O(1) random access into a ParamSpace.

Every configuration of a ParamSpace gets a unique integer index in
``[0, size())`` through a mixed-radix scheme:

- Product spaces: each dimension is a digit whose base is the dimension's
  cardinality. Dimension ``k`` has place value
  ``p_k = card_0 * ... * card_{k-1}``, so the first dimension varies
  fastest. ``digit_k = (index // p_k) % card_k``.
- A digit selects a candidate by cumulative offset inside the dimension.
  Candidates owning a nested space take up as many digit values as the
  nested space has configurations; the digit minus the candidate's offset
  is then decoded inside the nested space.
- Union spaces: alternatives occupy contiguous blocks of indices in
  declaration order.

Instances are immutable after construction, so ``get`` is safe to call
from many threads at once.
"""

from __future__ import annotations

import operator
from bisect import bisect_right
from typing import Any, Iterator, List, Optional

from ..exceptions import ParameterIndexError
from ..utils.logging_setup import get_logger
from .param_set import ParamSet
from .space import ParameterDimension, ParamSpace

logger = get_logger(__name__)


def _block_offsets(sizes: List[int]) -> List[int]:
    """Start offset of each block when blocks of ``sizes`` are laid end to end."""
    offsets = []
    total = 0
    for size in sizes:
        offsets.append(total)
        total += size
    return offsets


def _locate(offsets: List[int], position: int) -> int:
    # last block starting at or before position; empty blocks share their
    # start with the following block and are skipped by bisect_right
    return bisect_right(offsets, position) - 1


class _IndexedDimension:
    """A dimension with cached candidate offsets and indexed nested spaces."""

    __slots__ = ("name", "values", "nested", "offsets", "cardinality")

    def __init__(self, dimension: ParameterDimension):
        self.name = dimension.name
        self.values: List[Any] = []
        self.nested: List[Optional[IndexedParameterSpace]] = []
        sizes: List[int] = []
        for candidate in dimension.candidates:
            self.values.append(candidate.value)
            if candidate.space is None:
                self.nested.append(None)
                sizes.append(1)
            else:
                indexed = IndexedParameterSpace(candidate.space)
                self.nested.append(indexed)
                sizes.append(indexed.size())
        self.offsets = _block_offsets(sizes)
        self.cardinality = 0 if dimension.disabled else sum(sizes)

    def decode(self, digit: int, param_set: ParamSet) -> None:
        position = _locate(self.offsets, digit)
        param_set.add(self.name, self.values[position])
        nested = self.nested[position]
        if nested is not None:
            nested._decode(digit - self.offsets[position], param_set)


class IndexedParameterSpace:
    """
    Mixed-radix addressing over a ParamSpace.

    Example:
        indexed = IndexedParameterSpace(space)
        indexed.size()     # number of configurations
        indexed.get(5)     # ParamSet for configuration 5
    """

    def __init__(self, param_space: ParamSpace):
        """
        Index a parameter space.

        Args:
            param_space: Space to index. Not copied; must not be mutated.
        """
        self._param_space = param_space
        self._dimensions: List[_IndexedDimension] = []
        self._place_values: List[int] = []
        self._alternatives: List[IndexedParameterSpace] = []
        self._alternative_offsets: List[int] = []

        if param_space.alternatives:
            self._alternatives = [IndexedParameterSpace(alt) for alt in param_space.alternatives]
            sizes = [alt.size() for alt in self._alternatives]
            self._alternative_offsets = _block_offsets(sizes)
            self._size = sum(sizes)
        else:
            place_value = 1
            for dimension in param_space.dimensions:
                indexed = _IndexedDimension(dimension)
                self._dimensions.append(indexed)
                self._place_values.append(place_value)
                place_value *= indexed.cardinality
            self._size = place_value

    @classmethod
    def build(cls, param_space: ParamSpace) -> "IndexedParameterSpace":
        """Index a parameter space, logging its shape."""
        indexed = cls(param_space)
        logger.debug(
            f"Indexed parameter space: size={indexed.size()}, "
            f"dimensions={param_space.dimension_names()}, "
            f"alternatives={len(param_space.alternatives)}"
        )
        return indexed

    @property
    def param_space(self) -> ParamSpace:
        return self._param_space

    @property
    def place_values(self) -> List[int]:
        """Place value of each top-level dimension (product spaces only)."""
        return list(self._place_values)

    @property
    def alternative_offsets(self) -> List[int]:
        """First index of each alternative's block (union spaces only)."""
        return list(self._alternative_offsets)

    def size(self) -> int:
        """Total number of configurations."""
        return self._size

    def get(self, index: int) -> ParamSet:
        """
        Decode an index into its configuration.

        Args:
            index: Integer in ``[0, size())``

        Returns:
            A fresh ParamSet

        Raises:
            ParameterIndexError: If ``index`` is not an integer in range
        """
        index = self._check_index(index)
        param_set = ParamSet()
        self._decode(index, param_set)
        return param_set

    def _check_index(self, index: Any) -> int:
        if isinstance(index, bool):
            raise ParameterIndexError(f"Index must be an integer, got {index!r}")
        try:
            index = operator.index(index)
        except TypeError:
            raise ParameterIndexError(f"Index must be an integer, got {index!r}") from None
        if index < 0 or index >= self._size:
            raise ParameterIndexError(f"Index {index} out of range [0, {self._size})")
        return index

    def _decode(self, index: int, param_set: ParamSet) -> None:
        if self._alternatives:
            position = _locate(self._alternative_offsets, index)
            alternative = self._alternatives[position]
            alternative._decode(index - self._alternative_offsets[position], param_set)
            return
        for dimension, place_value in zip(self._dimensions, self._place_values):
            digit = (index // place_value) % dimension.cardinality
            dimension.decode(digit, param_set)

    def index_ranges(self, workers: int) -> List[range]:
        """
        Split ``[0, size())`` into contiguous blocks for independent workers.

        Args:
            workers: Number of blocks wanted (>= 1)

        Returns:
            Up to ``workers`` non-empty ranges covering every index once
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        base, extra = divmod(self._size, workers)
        ranges = []
        start = 0
        for worker in range(workers):
            stop = start + base + (1 if worker < extra else 0)
            if stop > start:
                ranges.append(range(start, stop))
            start = stop
        return ranges

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> ParamSet:
        return self.get(index)

    def __iter__(self) -> Iterator[ParamSet]:
        for index in range(self._size):
            yield self.get(index)

    def __repr__(self) -> str:
        return f"IndexedParameterSpace(size={self._size})"
