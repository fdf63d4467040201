"""Time series containers."""

from .series import Dataset, TimeSeriesInstance, as_series

__all__ = ["Dataset", "TimeSeriesInstance", "as_series"]
