"""Sweeps of distance measures over parameter searches."""

from .sweep import DistanceSweep, SweepResult

__all__ = ["DistanceSweep", "SweepResult"]
