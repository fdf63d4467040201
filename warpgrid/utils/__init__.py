"""Utility modules."""

from .logging_setup import (
    setup_logging,
    shutdown_logging,
    get_logger,
    get_category_loggers,
    set_verbose_mode,
    is_verbose_mode,
    set_log_level_override,
    get_effective_log_level,
)
from .trace_context import (
    get_sweep_id,
    set_sweep_id,
    new_sweep,
    generate_sweep_id,
)
from .perf_logger import (
    log_timing,
    timed,
)

__all__ = [
    # Logging setup
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "get_category_loggers",
    "set_verbose_mode",
    "is_verbose_mode",
    "set_log_level_override",
    "get_effective_log_level",
    # Trace context
    "get_sweep_id",
    "set_sweep_id",
    "new_sweep",
    "generate_sweep_id",
    # Performance logging
    "log_timing",
    "timed",
]
