"""
Unit tests for IndexedParameterSpace.

Tests:
- Mixed-radix decode order (first dimension varies fastest)
- Bijection against a brute-force expansion
- Unions, empty alternatives and disabled dimensions
- Index validation
- Worker ranges and concurrent decoding
"""

import itertools
from concurrent.futures import ThreadPoolExecutor
from typing import List

import pytest

from warpgrid.exceptions import ParameterIndexError, PreconditionError
from warpgrid.params import IndexedParameterSpace, ParameterDimension, ParamSet, ParamSpace


def expand(space: ParamSpace) -> List[ParamSet]:
    """Every configuration of ``space`` in index order, by plain enumeration."""
    if space.alternatives:
        return [params for alternative in space.alternatives for params in expand(alternative)]

    per_dimension = []
    for dimension in space.dimensions:
        fragments = []
        if not dimension.disabled:
            for candidate in dimension.candidates:
                if candidate.space is None:
                    fragments.append(ParamSet({dimension.name: candidate.value}))
                else:
                    for nested in expand(candidate.space):
                        fragments.append(ParamSet({dimension.name: candidate.value}).merge(nested))
        per_dimension.append(fragments)

    configurations = []
    # itertools.product varies the last iterable fastest; reverse for first-fastest
    for combination in itertools.product(*reversed(per_dimension)):
        params = ParamSet()
        for fragment in reversed(combination):
            params.merge(fragment)
        configurations.append(params)
    return configurations


@pytest.fixture
def mixed_space() -> ParamSpace:
    """A union whose alternatives nest further products and unions."""
    return ParamSpace.union(
        ParamSpace.product(
            ParameterDimension.of("kernel", ["linear"]),
            ParameterDimension.of("c", [0.1, 1.0, 10.0]),
        ),
        ParamSpace.product(ParameterDimension(name="never", disabled=True)),
        ParamSpace.product(
            ParameterDimension.of("kernel", ["rbf"]),
            ParameterDimension.of(
                "gamma",
                ["auto", "fixed"],
                nested={
                    "fixed": ParamSpace.union(
                        ParamSpace.product(ParameterDimension.of("value", [0.5, 2.0])),
                        ParamSpace.product(ParameterDimension.of("scale", [True])),
                    )
                },
            ),
            ParameterDimension.of("c", [1.0, 100.0]),
        ),
    )


class TestDecodeOrder:
    """Tests for mixed-radix decoding."""

    def test_place_values(self, window_space) -> None:
        """Test place values are products of earlier cardinalities."""
        indexed = IndexedParameterSpace(window_space)
        assert indexed.place_values == [1, 2]
        assert indexed.size() == 8
        assert len(indexed) == 8

    def test_first_dimension_varies_fastest(self, window_space) -> None:
        """Test the first dimension varies fastest."""
        indexed = IndexedParameterSpace(window_space)
        assert indexed.get(0) == {"penalty": 1.5, "window": "unconstrained"}
        assert indexed.get(1) == {"penalty": 2.0, "window": "unconstrained"}
        assert indexed.get(2) == {"penalty": 1.5, "window": "constrained", "window_size": 1}
        assert indexed.get(5) == {"penalty": 2.0, "window": "constrained", "window_size": 3}
        assert indexed.get(7) == {"penalty": 2.0, "window": "constrained", "window_size": 5}

    def test_get_returns_fresh_param_sets(self, window_space) -> None:
        """Test every get() returns a new ParamSet."""
        indexed = IndexedParameterSpace(window_space)
        first = indexed.get(0)
        first.add("penalty", 99)
        assert indexed.get(0) == {"penalty": 1.5, "window": "unconstrained"}

    def test_getitem_and_iter(self, window_space) -> None:
        """Test indexing and iteration agree with get()."""
        indexed = IndexedParameterSpace(window_space)
        assert indexed[3] == indexed.get(3)
        assert list(indexed) == [indexed.get(i) for i in range(8)]

    def test_empty_product(self) -> None:
        """Test the empty product decodes to one empty configuration."""
        indexed = IndexedParameterSpace(ParamSpace())
        assert indexed.size() == 1
        assert indexed.get(0) == ParamSet()

    def test_same_name_in_nested_space_appends(self) -> None:
        """Test a repeated name in a nested space appends its value."""
        space = ParamSpace.product(
            ParameterDimension.of(
                "layer",
                ["dense", "stacked"],
                nested={"stacked": ParamSpace.product(ParameterDimension.of("layer", [2, 3]))},
            )
        )
        indexed = IndexedParameterSpace(space)
        assert indexed.size() == 3
        assert indexed.get(0)["layer"] == ["dense"]
        assert indexed.get(1)["layer"] == ["stacked", 2]
        assert indexed.get(2)["layer"] == ["stacked", 3]


class TestBijection:
    """Every index maps to a distinct configuration and every configuration is reached."""

    def test_matches_enumeration(self, window_space) -> None:
        """Test decoding matches a direct enumeration."""
        indexed = IndexedParameterSpace(window_space)
        assert list(indexed) == expand(window_space)

    def test_mixed_space_matches_enumeration(self, mixed_space) -> None:
        """Test decoding a nested union matches a direct enumeration."""
        indexed = IndexedParameterSpace(mixed_space)
        expected = expand(mixed_space)
        assert indexed.size() == len(expected) == 3 + 0 + 4 * 2
        assert list(indexed) == expected

    def test_distinct(self, mixed_space) -> None:
        """Test every index decodes to a distinct configuration."""
        indexed = IndexedParameterSpace(mixed_space)
        keys = {params.key() for params in indexed}
        assert len(keys) == indexed.size()

    def test_larger_product(self) -> None:
        """Test decoding a larger product."""
        space = ParamSpace.product(
            ParameterDimension.of("a", [0, 1, 2]),
            ParameterDimension.of("b", ["x", "y"], nested={"y": ParamSpace.product(
                ParameterDimension.of("c", [True, False]),
                ParameterDimension.of("d", [1, 2, 3]),
            )}),
            ParameterDimension.of("e", [None, "z"]),
        )
        indexed = IndexedParameterSpace(space)
        assert indexed.size() == 3 * 7 * 2
        assert list(indexed) == expand(space)


class TestUnion:
    """Tests for union spaces."""

    def test_alternatives_occupy_contiguous_blocks(self, mixed_space) -> None:
        """Test alternatives occupy consecutive index blocks."""
        indexed = IndexedParameterSpace(mixed_space)
        assert indexed.alternative_offsets == [0, 3, 3]
        kernels = [params.first("kernel") for params in indexed]
        assert kernels == ["linear"] * 3 + ["rbf"] * 8

    def test_empty_alternative_is_skipped(self, mixed_space) -> None:
        """Test an empty alternative takes no indices."""
        indexed = IndexedParameterSpace(mixed_space)
        assert indexed.get(3) == {"kernel": "rbf", "gamma": "auto", "c": 1.0}
        assert "never" not in indexed.get(3)

    def test_nested_union(self, mixed_space) -> None:
        """Test decoding a union nested under a candidate."""
        indexed = IndexedParameterSpace(mixed_space)
        # rbf block: gamma digit is the fast one (auto, fixed/0.5, fixed/2.0, fixed/scale)
        assert indexed.get(4) == {"kernel": "rbf", "gamma": "fixed", "value": 0.5, "c": 1.0}
        assert indexed.get(6) == {"kernel": "rbf", "gamma": "fixed", "scale": True, "c": 1.0}
        assert indexed.get(9) == {"kernel": "rbf", "gamma": "fixed", "value": 2.0, "c": 100.0}

    def test_all_alternatives_empty(self) -> None:
        """Test a union of empty alternatives is empty."""
        space = ParamSpace.union(
            ParamSpace.product(ParameterDimension(name="a", disabled=True)),
            ParamSpace.product(ParameterDimension(name="b", disabled=True)),
        )
        indexed = IndexedParameterSpace(space)
        assert indexed.size() == 0
        with pytest.raises(ParameterIndexError):
            indexed.get(0)


class TestIndexValidation:
    """Tests for out-of-range and non-integer indices."""

    @pytest.mark.parametrize("index", [8, 9, 100, -1])
    def test_out_of_range(self, window_space, index) -> None:
        """Test out-of-range indices raise ParameterIndexError."""
        indexed = IndexedParameterSpace(window_space)
        with pytest.raises(ParameterIndexError, match=r"out of range \[0, 8\)"):
            indexed.get(index)

    @pytest.mark.parametrize("index", [1.0, "1", True, None])
    def test_not_an_integer(self, window_space, index) -> None:
        """Test non-integer indices are rejected."""
        indexed = IndexedParameterSpace(window_space)
        with pytest.raises(ParameterIndexError, match="must be an integer"):
            indexed.get(index)

    def test_error_hierarchy(self, window_space) -> None:
        """Test ParameterIndexError is also an IndexError."""
        indexed = IndexedParameterSpace(window_space)
        with pytest.raises(IndexError):
            indexed.get(8)
        with pytest.raises(PreconditionError):
            indexed.get(8)

    def test_disabled_dimension(self) -> None:
        """Test a disabled dimension empties the space."""
        space = ParamSpace.product(
            ParameterDimension.of("a", [1, 2]),
            ParameterDimension.of("b", [1], disabled=True),
        )
        indexed = IndexedParameterSpace(space)
        assert indexed.size() == 0
        assert list(indexed) == []
        with pytest.raises(ParameterIndexError):
            indexed.get(0)


class TestConcurrency:
    """Tests for splitting work across workers."""

    @pytest.mark.parametrize("workers", [1, 3, 8, 20])
    def test_index_ranges_cover_space(self, window_space, workers) -> None:
        """Test worker ranges partition the index space."""
        indexed = IndexedParameterSpace(window_space)
        ranges = indexed.index_ranges(workers)
        assert len(ranges) == min(workers, 8)
        assert all(len(r) > 0 for r in ranges)
        assert [i for r in ranges for i in r] == list(range(8))

    def test_index_ranges_rejects_no_workers(self, window_space) -> None:
        """Test index_ranges needs at least one worker."""
        with pytest.raises(ValueError):
            IndexedParameterSpace(window_space).index_ranges(0)

    def test_concurrent_get(self, mixed_space) -> None:
        """Test decoding from several threads at once."""
        indexed = IndexedParameterSpace(mixed_space)
        expected = [indexed.get(i) for i in range(indexed.size())]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(indexed.get, list(range(indexed.size())) * 10))
        assert results == expected * 10

    def test_repr(self, window_space) -> None:
        """Test indexed space repr."""
        assert repr(IndexedParameterSpace(window_space)) == "IndexedParameterSpace(size=8)"
