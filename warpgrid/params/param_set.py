"""
ParamSet - one concrete point of a parameter space.

Maps each dimension name to the ordered list of values resolved for it.
Usually a single value; a nested space that reuses a name appends further
values under the same flag.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Tuple

_MISSING = object()


class ParamSet(Mapping):
    """
    Ordered mapping of parameter name → list of resolved values.

    Produced by decoding an index of an IndexedParameterSpace. Compares
    equal to other ParamSets (and plain dicts) with the same assignments.

    Example:
        params = indexed_space.get(3)
        params["penalty"]          # [2.0]
        params.first("penalty")    # 2.0
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, List[Any]] = {}
        if values:
            for name, value in values.items():
                if isinstance(value, list):
                    for item in value:
                        self.add(name, item)
                else:
                    self.add(name, value)

    def add(self, name: str, value: Any) -> "ParamSet":
        """Append a resolved value under ``name``."""
        self._values.setdefault(name, []).append(value)
        return self

    def merge(self, other: "ParamSet") -> "ParamSet":
        """Append every value of ``other`` in its order."""
        for name, values in other.items():
            for value in values:
                self.add(name, value)
        return self

    def first(self, name: str, default: Any = _MISSING) -> Any:
        """
        Get the first resolved value of ``name``.

        Raises:
            KeyError: If ``name`` is absent and no default is given.
        """
        values = self._values.get(name)
        if not values:
            if default is _MISSING:
                raise KeyError(name)
            return default
        return values[0]

    def to_dict(self) -> Dict[str, List[Any]]:
        """Copy as a plain ``dict`` of lists."""
        return {name: list(values) for name, values in self._values.items()}

    def key(self) -> Tuple[Tuple[str, Tuple[Any, ...]], ...]:
        """Hashable identity, for distinctness checks over hashable values."""
        return tuple((name, tuple(values)) for name, values in self._values.items())

    def __getitem__(self, name: str) -> List[Any]:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParamSet):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == ParamSet(other)._values
        return NotImplemented

    __hash__ = None  # mutable via add()

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={values!r}" for name, values in self._values.items())
        return f"ParamSet({inner})"
