"""
Declarative parameter search spaces.

A search space is a tree:
- ParamSpace: either a cartesian product of ParameterDimensions, or a
  disjoint union of alternative ParamSpaces
- ParameterDimension: a named axis with ordered candidates
- Candidate: one value of a dimension, optionally owning a nested
  ParamSpace that only applies when that value is chosen

Example (gap penalty x window, where a constrained window unlocks a size):

    space = ParamSpace.product(
        ParameterDimension.of("penalty", [1.5, 2.0]),
        ParameterDimension.of(
            "window",
            ["unconstrained", "constrained"],
            nested={"constrained": ParamSpace.product(
                ParameterDimension.of("window_size", [1, 3, 5]),
            )},
        ),
    )
    space.size()  # 2 * (1 + 3) = 8
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

_MISSING = object()


class Candidate(BaseModel):
    """One candidate value of a dimension, with an optional nested space."""

    model_config = ConfigDict(frozen=True)

    value: Any = Field(description="Candidate value")
    space: Optional[ParamSpace] = Field(
        default=None, description="Space unlocked when this value is chosen"
    )

    def cardinality(self) -> int:
        """Number of configurations this candidate contributes."""
        if self.space is None:
            return 1
        return self.space.size()


class ParameterDimension(BaseModel):
    """A single tunable axis and its ordered candidates."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Parameter name")
    candidates: Tuple[Candidate, ...] = Field(default_factory=tuple, description="Ordered candidates")
    disabled: bool = Field(default=False, description="Contribute no configurations")

    @model_validator(mode="before")
    @classmethod
    def coerce_values(cls, data: Any) -> Any:
        """Accept the ``values`` / ``nested`` form used by YAML documents."""
        if not isinstance(data, Mapping) or "values" not in data:
            return data
        data = dict(data)
        if "candidates" in data:
            raise ValueError("Use either 'values' or 'candidates', not both")
        nested = data.pop("nested", None) or {}
        data["candidates"] = [
            _as_candidate(value, nested) for value in data.pop("values") or []
        ]
        return data

    @model_validator(mode="after")
    def validate_candidates(self) -> "ParameterDimension":
        if not self.name:
            raise ValueError("Dimension requires a name")
        if not self.candidates and not self.disabled:
            raise ValueError(
                f"Dimension '{self.name}' requires at least one candidate value "
                "(set disabled=True for an intentionally empty dimension)"
            )
        duplicate = _first_duplicate(self.values)
        if duplicate is not _MISSING:
            # two candidates with one value would decode to the same configuration
            raise ValueError(f"Dimension '{self.name}' repeats candidate value {duplicate!r}")
        return self

    @classmethod
    def of(
        cls,
        name: str,
        values: Sequence[Any],
        nested: Optional[Mapping[Any, ParamSpace]] = None,
        disabled: bool = False,
    ) -> "ParameterDimension":
        """
        Build a dimension from plain values.

        Args:
            name: Parameter name
            values: Ordered candidate values
            nested: Optional mapping of candidate value → nested space
            disabled: Mark the dimension as contributing no configurations

        Returns:
            ParameterDimension
        """
        nested = nested or {}
        candidates = [
            Candidate(value=value, space=_lookup_nested(nested, value)) for value in values
        ]
        return cls(name=name, candidates=candidates, disabled=disabled)

    @property
    def values(self) -> List[Any]:
        """Candidate values in declaration order."""
        return [candidate.value for candidate in self.candidates]

    def cardinality(self) -> int:
        """Sum of the candidates' contributions (0 when disabled)."""
        if self.disabled:
            return 0
        return sum(candidate.cardinality() for candidate in self.candidates)


class ParamSpace(BaseModel):
    """
    Cartesian product of dimensions, or a union of alternative spaces.

    Declaring both dimensions and alternatives on the same space is
    rejected. With neither, the space is the empty product and holds a
    single empty configuration.
    """

    model_config = ConfigDict(frozen=True)

    dimensions: Tuple[ParameterDimension, ...] = Field(default_factory=tuple)
    alternatives: Tuple[ParamSpace, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def validate_structure(self) -> "ParamSpace":
        if self.dimensions and self.alternatives:
            raise ValueError(
                "A space takes either dimensions or alternatives, not both; "
                "wrap the dimensions in their own alternative instead"
            )
        seen = set()
        for dimension in self.dimensions:
            if dimension.name in seen:
                raise ValueError(f"Duplicate dimension name: {dimension.name}")
            seen.add(dimension.name)
        leaves = [leaf for leaf in _union_leaves(self) if leaf.size() > 0]
        for i, first in enumerate(leaves):
            for second in leaves[i + 1:]:
                if _overlaps(first, second):
                    raise ValueError(
                        "Union alternatives overlap: "
                        f"{_describe(first)} and {_describe(second)} share a configuration"
                    )
        return self

    @classmethod
    def product(cls, *dimensions: ParameterDimension) -> "ParamSpace":
        """Space of every combination of the given dimensions."""
        return cls(dimensions=tuple(dimensions))

    @classmethod
    def union(cls, *spaces: ParamSpace) -> "ParamSpace":
        """Space holding the configurations of each alternative in turn."""
        return cls(alternatives=tuple(spaces))

    @property
    def is_union(self) -> bool:
        return bool(self.alternatives)

    def dimension_names(self) -> List[str]:
        return [dimension.name for dimension in self.dimensions]

    def size(self) -> int:
        """Total number of configurations in the space."""
        if self.alternatives:
            return sum(alternative.size() for alternative in self.alternatives)
        total = 1
        for dimension in self.dimensions:
            total *= dimension.cardinality()
        return total


def _lookup_nested(nested: Mapping[Any, ParamSpace], value: Any) -> Optional[ParamSpace]:
    try:
        return nested.get(value)
    except TypeError:
        # unhashable candidate values cannot own nested spaces
        return None


def _as_candidate(value: Any, nested: Mapping[Any, Any]) -> Any:
    # mappings carrying a "value" key are already candidate documents
    if isinstance(value, Candidate) or (isinstance(value, Mapping) and "value" in value):
        return value
    return {"value": value, "space": _lookup_nested(nested, value)}


def _first_duplicate(values: Sequence[Any]) -> Any:
    """First value equal to an earlier one, or ``_MISSING``."""
    seen: List[Any] = []
    for value in values:
        if any(value == other for other in seen):
            return value
        seen.append(value)
    return _MISSING


def _union_leaves(space: ParamSpace) -> List[ParamSpace]:
    """Non-union spaces reached by flattening nested unions."""
    if not space.alternatives:
        return [space]
    return [leaf for alternative in space.alternatives for leaf in _union_leaves(alternative)]


def _flat_values(space: ParamSpace) -> Optional[dict]:
    """Name → candidate values of a product without nested spaces, else None."""
    values = {}
    for dimension in space.dimensions:
        if any(candidate.space is not None for candidate in dimension.candidates):
            return None
        values[dimension.name] = dimension.values
    return values


def _overlaps(first: ParamSpace, second: ParamSpace) -> bool:
    """
    Whether two non-empty product spaces share a configuration.

    Exact for products of plain candidates; products with nested spaces
    are only compared for equality.
    """
    if first == second:
        return True
    first_values = _flat_values(first)
    second_values = _flat_values(second)
    if first_values is None or second_values is None:
        return False
    if set(first_values) != set(second_values):
        return False
    return all(
        any(value == other for value in first_values[name] for other in second_values[name])
        for name in first_values
    )


def _describe(space: ParamSpace) -> str:
    names = ", ".join(space.dimension_names())
    return f"[{names}]"


Candidate.model_rebuild()
ParameterDimension.model_rebuild()
ParamSpace.model_rebuild()
