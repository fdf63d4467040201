"""
Trace context for correlating logs across a single parameter sweep.

Provides:
- Unique sweep IDs (6-char hex) for each sweep over a parameter space
- Context propagation via contextvars (thread- and async-safe)
- Easy access to current sweep ID from any module

Usage:
    # In the sweep driver
    with new_sweep():
        for params in iterator:
            ...

    # In any module
    from warpgrid.utils.trace_context import get_sweep_id
    logger.info(f"[{get_sweep_id()}] Evaluating...")
"""

from __future__ import annotations

import secrets
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Optional, Generator

# Context variable for the current sweep ID
_sweep_id: ContextVar[Optional[str]] = ContextVar("sweep_id", default=None)

# Counter for sweeps within a session (for debugging)
_sweep_counter: int = 0


def generate_sweep_id() -> str:
    """
    Generate a new unique sweep ID.

    Returns:
        6-character hex string (e.g., "a7f3b2").
    """
    return secrets.token_hex(3)


def get_sweep_id() -> str:
    """
    Get the current sweep ID.

    Returns:
        Current sweep ID, or "------" if no sweep is active.
    """
    sweep_id = _sweep_id.get()
    return sweep_id if sweep_id else "------"


def set_sweep_id(sweep_id: str) -> None:
    """Set the current sweep ID."""
    _sweep_id.set(sweep_id)


def clear_sweep_id() -> None:
    """Clear the current sweep ID."""
    _sweep_id.set(None)


@contextmanager
def new_sweep() -> Generator[str, None, None]:
    """
    Context manager to open a new sweep with a unique ID.

    The previous sweep ID (if any) is restored when the context exits,
    so sweeps may nest.

    Yields:
        The new sweep ID.
    """
    global _sweep_counter
    _sweep_counter += 1

    sweep_id = generate_sweep_id()
    token = _sweep_id.set(sweep_id)

    try:
        yield sweep_id
    finally:
        _sweep_id.reset(token)


def get_sweep_counter() -> int:
    """Get the total number of sweeps opened in this session."""
    return _sweep_counter


def reset_sweep_counter() -> None:
    """Reset the sweep counter (for testing)."""
    global _sweep_counter
    _sweep_counter = 0
