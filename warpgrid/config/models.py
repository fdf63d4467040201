"""Configuration data models."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from ..params.space import ParamSpace


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    json: bool = False
    file: str = ""  # Empty string disables the file handler
    colors: bool = True


@dataclass
class SearchConfig:
    """Parameter search configuration."""
    method: str = "grid"  # "grid" or "random"
    num_iterations: Optional[int] = None  # None = size of the space
    seed: int = 0
    with_replacement: bool = False


@dataclass
class DistanceConfig:
    """Default distance measure settings."""
    measure: str = "erp"  # "erp" or "dtw"
    window_size: int = -1
    penalty: float = 0.0
    keep_matrix: bool = False


@dataclass
class AppConfig:
    """Complete library configuration."""
    logging: LoggingConfig
    search: SearchConfig
    distance: DistanceConfig
    spaces: Dict[str, ParamSpace] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)  # Merged raw config dict
