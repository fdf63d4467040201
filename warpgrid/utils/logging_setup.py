"""
Logging setup with categories and sweep ID support.

Provides:
- 5 log categories: system, distance, params, search, perf
- Automatic module → category routing
- Sweep ID correlation in all logs
- Console output with optional colors
- JSON or standard text formatting
- Optional file output

Categories:
- system: Configuration loading, setup
- distance: Distance measures, parameter builders, neighbour search
- params: Parameter spaces, indexing, iterators
- search: Sweeps over parameter grids
- perf: Timing diagnostics
"""

from __future__ import annotations

import logging
import sys
import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, List

from ..config.models import LoggingConfig

# Import trace context for sweep ID
from .trace_context import get_sweep_id

# =============================================================================
# GLOBAL STATE
# =============================================================================

# Global verbose flag (forces DEBUG level)
_verbose_mode: bool = False

# Global log level override
_log_level_override: Optional[str] = None

# Root logger name for all categories
ROOT_LOGGER = "warpgrid"

# =============================================================================
# LOG CATEGORIES AND ROUTING
# =============================================================================

# Available log categories
CATEGORIES = ["system", "distance", "params", "search", "perf"]

# Module path → category routing
# More specific paths should come first
MODULE_ROUTING: List[tuple[str, str]] = [
    ("warpgrid.distances", "distance"),
    ("warpgrid.data", "distance"),
    ("warpgrid.params", "params"),
    ("warpgrid.search", "search"),
    ("warpgrid.utils.perf_logger", "perf"),
    ("warpgrid.config", "system"),

    # Default fallback
    ("warpgrid", "system"),
]


def get_category_for_module(module_name: str) -> str:
    """
    Determine the log category for a given module name.

    Args:
        module_name: Full module path (e.g., "warpgrid.params.indexed").

    Returns:
        Category name (system, distance, params, search, or perf).
    """
    for prefix, category in MODULE_ROUTING:
        if module_name.startswith(prefix):
            return category
    return "system"


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable verbose mode (DEBUG level logging)."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose_mode


def set_log_level_override(level: Optional[str]) -> None:
    """Set a global log level override."""
    global _log_level_override
    _log_level_override = level.upper() if level else None


def get_effective_log_level(configured: str = "INFO") -> str:
    """Get the effective log level (considering verbose mode and overrides)."""
    if _verbose_mode:
        return "DEBUG"
    if _log_level_override:
        return _log_level_override
    return configured.upper()


# =============================================================================
# FORMATTERS
# =============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging with sweep ID support.

    Formats log records as single-line JSON with timestamp, level,
    category, sweep ID, message and any ``data`` passed via ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_entry = {
            "ts": datetime.now().isoformat(),
            "level": record.levelname,
            "cat": self._get_category(record.name),
            "sweep": get_sweep_id(),
            "msg": record.getMessage(),
        }

        if hasattr(record, "data") and record.data:
            log_entry["data"] = record.data

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)

    def _get_category(self, logger_name: str) -> str:
        """Extract category from logger name."""
        if logger_name.startswith(ROOT_LOGGER + "."):
            parts = logger_name.split(".")
            if len(parts) >= 2 and parts[1] in CATEGORIES:
                return parts[1]
        return "system"


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter with sweep ID and color support.

    Format: [LEVEL] [sweep] message
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console output."""
        sweep_id = get_sweep_id()
        level = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level, "")
            reset = self.RESET
            return f"{color}[{level:7}]{reset} [{sweep_id}] {record.getMessage()}"
        else:
            return f"[{level:7}] [{sweep_id}] {record.getMessage()}"


# =============================================================================
# LOGGER FACTORY
# =============================================================================

def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for the given module, routed to its category logger.

    Args:
        module_name: Module name (typically __name__).

    Returns:
        Logger named ``warpgrid.<category>``.

    Example:
        from warpgrid.utils.logging_setup import get_logger
        logger = get_logger(__name__)
        logger.info("Processing...")
    """
    category = get_category_for_module(module_name)
    return logging.getLogger(f"{ROOT_LOGGER}.{category}")


def get_category_loggers() -> Dict[str, logging.Logger]:
    """Get all category loggers keyed by category name."""
    return {category: logging.getLogger(f"{ROOT_LOGGER}.{category}") for category in CATEGORIES}


def setup_logging(config: LoggingConfig) -> logging.Logger:
    """
    Configure the ``warpgrid`` logger tree.

    Category loggers propagate to the ``warpgrid`` root logger, which owns
    the handlers. Calling this again replaces the previous handlers.

    Args:
        config: Logging configuration.

    Returns:
        The configured ``warpgrid`` root logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    level = get_effective_log_level(config.level)
    logger.setLevel(getattr(logging, level, logging.INFO))

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    if config.json:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ConsoleFormatter(use_colors=config.colors)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(filename=config.file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter() if config.json else logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def shutdown_logging() -> None:
    """Flush and close all handlers on the ``warpgrid`` logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        handler.flush()
        handler.close()
    logger.handlers.clear()
