"""
Performance logging utilities.

Provides a timing context manager and decorator for automatic
performance logging. All timing logs include the current sweep ID
for correlation.

Usage:
    # Context manager
    with log_timing("erp_sweep") as ctx:
        ctx["configs"] = len(space)
        results = sweep.run(a, b)

    # Decorator
    @timed("build_erp_params")
    def build_erp_params(dataset):
        ...

Guidelines:
    Use log_timing for whole sweeps, space construction and batch
    nearest neighbour searches. Do NOT use it around single distance
    calls or per-cell work: the logging overhead dominates there.
"""

from __future__ import annotations

import time
import logging
import functools
from contextlib import contextmanager
from typing import Optional, Callable, Any, Generator

from .trace_context import get_sweep_id

# Performance logger - uses 'warpgrid.perf' category
_perf_logger: Optional[logging.Logger] = None


def get_perf_logger() -> logging.Logger:
    """Get or create the performance logger."""
    global _perf_logger
    if _perf_logger is None:
        _perf_logger = logging.getLogger("warpgrid.perf")
    return _perf_logger


def set_perf_logger(logger: logging.Logger) -> None:
    """Set the performance logger (for testing or custom configuration)."""
    global _perf_logger
    _perf_logger = logger


@contextmanager
def log_timing(
    operation: str,
    warn_threshold_ms: float = 5000.0,
    error_threshold_ms: float = 60000.0,
    extra: Optional[dict] = None,
) -> Generator[dict, None, None]:
    """
    Context manager to log operation timing.

    Logs timing to the perf category with sweep ID. Automatically
    escalates log level based on duration thresholds.

    Args:
        operation: Name of the operation being timed.
        warn_threshold_ms: Duration above which to log as WARNING.
        error_threshold_ms: Duration above which to log as ERROR.
        extra: Additional data to include in the log.

    Yields:
        Dict that can be updated with additional context during execution.
    """
    logger = get_perf_logger()
    context = extra.copy() if extra else {}
    start_time = time.perf_counter()

    try:
        yield context
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        sweep_id = get_sweep_id()

        log_data = {
            "sweep": sweep_id,
            "operation": operation,
            "duration_ms": round(duration_ms, 2),
            **context,
        }

        if duration_ms >= error_threshold_ms:
            logger.error(f"[{sweep_id}] SLOW {operation}: {duration_ms:.1f}ms", extra={"data": log_data})
        elif duration_ms >= warn_threshold_ms:
            logger.warning(f"[{sweep_id}] {operation}: {duration_ms:.1f}ms (slow)", extra={"data": log_data})
        else:
            logger.debug(f"[{sweep_id}] {operation}: {duration_ms:.1f}ms", extra={"data": log_data})


def timed(
    operation: Optional[str] = None,
    warn_threshold_ms: float = 5000.0,
    error_threshold_ms: float = 60000.0,
) -> Callable:
    """
    Decorator to log function timing.

    Args:
        operation: Name of the operation. Defaults to function name.
        warn_threshold_ms: Duration above which to log as WARNING.
        error_threshold_ms: Duration above which to log as ERROR.

    Returns:
        Decorated function.
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation or func.__name__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with log_timing(op_name, warn_threshold_ms, error_threshold_ms):
                return func(*args, **kwargs)

        return wrapper

    return decorator
