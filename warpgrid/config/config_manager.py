"""
Configuration manager with environment-based loading.

Supports:
- Base configuration (base.yaml)
- Environment-specific overrides (dev.yaml, bench.yaml, ...)
- Named parameter spaces under ``spaces:``
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any
import yaml
import logging

from ..exceptions import ConfigurationError
from ..params.loader import parse_param_space
from ..params.space import ParamSpace
from .models import (
    AppConfig,
    DistanceConfig,
    LoggingConfig,
    SearchConfig,
)


logger = logging.getLogger(__name__)

SEARCH_METHODS = ("grid", "random")


class ConfigManager:
    """
    Configuration manager with environment support.

    Loads configuration in this order:
    1. base.yaml (default config)
    2. {env}.yaml (environment-specific, e.g., dev.yaml)

    Later configs override earlier ones.
    """

    def __init__(self, config_dir: str | Path = "config", env: str = "dev"):
        """
        Initialize config manager.

        Args:
            config_dir: Directory containing config files.
            env: Environment name (dev, bench, etc).
        """
        self.config_dir = Path(config_dir)
        self.env = env
        self.config: Dict[str, Any] = {}

    def load(self) -> AppConfig:
        """
        Load configuration from YAML files.

        Returns:
            AppConfig object.

        Raises:
            FileNotFoundError: If base config not found.
            ConfigurationError: If config is invalid.
        """
        base_path = self.config_dir / "base.yaml"
        if not base_path.exists():
            raise FileNotFoundError(f"Base config not found: {base_path}")

        self.config = self._load_yaml(base_path)
        logger.info(f"Loaded base config from {base_path}")

        # Load environment-specific config (optional)
        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            env_config = self._load_yaml(env_path)
            self.config = self._merge_dicts(self.config, env_config)
            logger.info(f"Loaded {self.env} config from {env_path}")

        return self._parse_config()

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML file."""
        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {path} must be a mapping")
        return data

    def _merge_dicts(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts (override wins)."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def _section(self, name: str) -> Dict[str, Any]:
        raw = self.config.get(name) or {}
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config section '{name}' must be a mapping")
        return raw

    def _parse_config(self) -> AppConfig:
        """Parse raw dict into AppConfig."""
        try:
            logging_raw = self._section("logging")
            logging_config = LoggingConfig(
                level=str(logging_raw.get("level", "INFO")).upper(),
                json=bool(logging_raw.get("json", False)),
                file=logging_raw.get("file", "") or "",
                colors=bool(logging_raw.get("colors", True)),
            )

            search_raw = self._section("search")
            num_iterations = search_raw.get("num_iterations")
            search = SearchConfig(
                method=str(search_raw.get("method", "grid")).lower(),
                num_iterations=None if num_iterations is None else int(num_iterations),
                seed=int(search_raw.get("seed", 0)),
                with_replacement=bool(search_raw.get("with_replacement", False)),
            )

            distance_raw = self._section("distance")
            distance = DistanceConfig(
                measure=str(distance_raw.get("measure", "erp")).lower(),
                window_size=int(distance_raw.get("window_size", -1)),
                penalty=float(distance_raw.get("penalty", 0.0)),
                keep_matrix=bool(distance_raw.get("keep_matrix", False)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e

        self._validate_search(search)

        spaces: Dict[str, ParamSpace] = {}
        for name, space_raw in self._section("spaces").items():
            try:
                spaces[name] = parse_param_space(space_raw)
            except ConfigurationError as e:
                raise ConfigurationError(f"Parameter space '{name}': {e}") from e
            logger.debug(f"Parameter space '{name}': {spaces[name].size()} configurations")

        return AppConfig(
            logging=logging_config,
            search=search,
            distance=distance,
            spaces=spaces,
            raw=self.config,
        )

    def _validate_search(self, search: SearchConfig) -> None:
        if search.method not in SEARCH_METHODS:
            raise ConfigurationError(
                f"search.method must be one of {SEARCH_METHODS}, got {search.method!r}"
            )
        if search.num_iterations is not None and search.num_iterations < 0:
            raise ConfigurationError(
                f"search.num_iterations must be >= 0, got {search.num_iterations}"
            )
