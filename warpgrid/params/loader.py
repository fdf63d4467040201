"""
Load parameter spaces from YAML documents or plain mappings.

Document format:

    dimensions:
      - name: penalty
        values: [1.5, 2.0]
      - name: window
        values:
          - value: full
          - value: banded
            space:
              dimensions:
                - name: window_size
                  values: [1, 3, 5]

A union is written as ``alternatives: [<space>, <space>, ...]``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .space import ParamSpace

SpaceSource = Union[Mapping[str, Any], str, Path, ParamSpace]


def parse_param_space(data: Mapping[str, Any]) -> ParamSpace:
    """
    Validate a mapping into a ParamSpace.

    Raises:
        ConfigurationError: If the mapping does not describe a valid space
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Parameter space must be a mapping, got {type(data).__name__}")
    try:
        return ParamSpace.model_validate(dict(data))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid parameter space: {e}") from e


def load_param_space(source: SpaceSource) -> ParamSpace:
    """
    Load a ParamSpace from a mapping, a YAML file path, or a ParamSpace.

    Args:
        source: Mapping, path to a YAML file, or an existing ParamSpace

    Returns:
        ParamSpace

    Raises:
        FileNotFoundError: If a path is given and does not exist
        ConfigurationError: If the document is invalid
    """
    if isinstance(source, ParamSpace):
        return source
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Parameter space file not found: {path}")
        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        return parse_param_space(data)
    return parse_param_space(source)
