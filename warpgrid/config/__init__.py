"""Configuration management."""

from .config_manager import ConfigManager
from .models import AppConfig, DistanceConfig, LoggingConfig, SearchConfig

__all__ = ["ConfigManager", "AppConfig", "DistanceConfig", "LoggingConfig", "SearchConfig"]
