"""
Time series containers.

A TimeSeriesInstance stores one or more channels of real values (NaN marks
a missing value) plus an optional class label index. Metadata (length
bounds, missing values, multivariate) is computed once at construction;
channel arrays are copied and made read-only so it cannot go stale.

Distances only read the univariate view of an instance and never look at
its label.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

ArrayLike = Union[Sequence[float], np.ndarray]


def as_series(values: Union["TimeSeriesInstance", ArrayLike]) -> np.ndarray:
    """
    Read-only 1-D float view of a sequence.

    Args:
        values: TimeSeriesInstance (univariate) or any 1-D sequence of numbers

    Returns:
        1-D float64 numpy array

    Raises:
        ValueError: If the input is multivariate or not one-dimensional
    """
    if isinstance(values, TimeSeriesInstance):
        return values.univariate()
    array = np.asarray(values, dtype=np.float64)
    if array.ndim != 1:
        raise ValueError(f"Expected a 1-D sequence, got shape {array.shape}")
    return array


class TimeSeriesInstance:
    """
    One time series example: channels of values and an optional label.

    Example:
        inst = TimeSeriesInstance([[1.0, 2.0, float("nan")]], label=1)
        inst.has_missing   # True
        inst.univariate()  # array([ 1.,  2., nan])
    """

    def __init__(self, channels: Sequence[ArrayLike], label: Optional[int] = None):
        """
        Args:
            channels: One sequence of values per channel (at least one)
            label: Class label index, if known
        """
        if isinstance(channels, np.ndarray) and channels.ndim == 1:
            channels = [channels]
        self._channels: List[np.ndarray] = []
        for channel in channels:
            array = np.array(channel, dtype=np.float64)
            if array.ndim != 1:
                raise ValueError(f"Each channel must be 1-D, got shape {array.shape}")
            array.setflags(write=False)
            self._channels.append(array)
        if not self._channels:
            raise ValueError("TimeSeriesInstance requires at least one channel")

        self.label = None if label is None else int(label)

        lengths = [len(channel) for channel in self._channels]
        self.min_length = min(lengths)
        self.max_length = max(lengths)
        self.has_missing = any(bool(np.isnan(channel).any()) for channel in self._channels)

    @property
    def num_channels(self) -> int:
        return len(self._channels)

    @property
    def is_multivariate(self) -> bool:
        return len(self._channels) > 1

    @property
    def channels(self) -> List[np.ndarray]:
        return list(self._channels)

    def univariate(self) -> np.ndarray:
        """The single channel of a univariate instance."""
        if self.is_multivariate:
            raise ValueError(
                f"Instance has {self.num_channels} channels; distances need a univariate series"
            )
        return self._channels[0]

    def to_array(self) -> List[np.ndarray]:
        """Copy of the channel values."""
        return [channel.copy() for channel in self._channels]

    def __len__(self) -> int:
        return self.max_length

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self._channels)

    def __repr__(self) -> str:
        return (
            f"TimeSeriesInstance(channels={self.num_channels}, length={self.max_length}, "
            f"label={self.label}, has_missing={self.has_missing})"
        )


class Dataset:
    """Ordered collection of TimeSeriesInstances."""

    def __init__(self, instances: Sequence[TimeSeriesInstance]):
        self._instances = list(instances)

    @classmethod
    def from_arrays(
        cls,
        data: Sequence[ArrayLike],
        labels: Optional[Sequence[int]] = None,
    ) -> "Dataset":
        """
        Build a univariate dataset, one row per instance.

        Args:
            data: Sequence of 1-D value sequences
            labels: Optional class label index per instance
        """
        if labels is not None and len(labels) != len(data):
            raise ValueError(f"Got {len(labels)} labels for {len(data)} instances")
        instances = []
        for i, row in enumerate(data):
            label = None if labels is None else labels[i]
            instances.append(TimeSeriesInstance([row], label=label))
        return cls(instances)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, label_column: Optional[str] = None) -> "Dataset":
        """
        Build a univariate dataset from a DataFrame, one row per instance.

        Args:
            frame: Numeric columns hold the series values in order
            label_column: Column holding class label indices, if any
        """
        labels = None
        values = frame
        if label_column is not None:
            labels = frame[label_column].astype(int).tolist()
            values = frame.drop(columns=[label_column])
        return cls.from_arrays(values.to_numpy(dtype=np.float64), labels)

    @property
    def series_length(self) -> int:
        """Longest series length over all instances."""
        if not self._instances:
            return 0
        return max(instance.max_length for instance in self._instances)

    @property
    def num_classes(self) -> int:
        labels = {instance.label for instance in self._instances if instance.label is not None}
        return len(labels)

    def std(self) -> float:
        """Population standard deviation of every value, ignoring NaN."""
        if not self._instances:
            return 0.0
        values = np.concatenate(
            [channel for instance in self._instances for channel in instance]
        )
        if values.size == 0 or np.isnan(values).all():
            return 0.0
        return float(np.nanstd(values))

    def __len__(self) -> int:
        return len(self._instances)

    def __getitem__(self, index: int) -> TimeSeriesInstance:
        return self._instances[index]

    def __iter__(self) -> Iterator[TimeSeriesInstance]:
        return iter(self._instances)

    def __repr__(self) -> str:
        return f"Dataset(instances={len(self)}, length={self.series_length}, classes={self.num_classes})"
