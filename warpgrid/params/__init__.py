"""
Hyperparameter search spaces.

Supports:
- Declarative product / union spaces with conditional (nested) dimensions
- O(1) index → configuration decoding (IndexedParameterSpace)
- Grid and random search iterators
- Loading spaces from YAML
"""

from .space import Candidate, ParameterDimension, ParamSpace
from .param_set import ParamSet
from .indexed import IndexedParameterSpace
from .iteration import (
    GridSearchIterator,
    ParamSearchIterator,
    RandomSearchIterator,
    build_iterator,
)
from .loader import load_param_space, parse_param_space

__all__ = [
    "Candidate",
    "ParameterDimension",
    "ParamSpace",
    "ParamSet",
    "IndexedParameterSpace",
    "ParamSearchIterator",
    "GridSearchIterator",
    "RandomSearchIterator",
    "build_iterator",
    "load_param_space",
    "parse_param_space",
]
