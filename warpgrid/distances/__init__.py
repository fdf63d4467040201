"""
Elastic distance measures.

Supports:
- ERP (edit distance with real penalty)
- DTW (dynamic time warping)
- Banded windows, early abandoning against a limit, optional full cost matrix
- Parameter spaces scaled to a dataset
"""

from typing import Any, Dict, Type

from ..config.models import DistanceConfig
from ..exceptions import ConfigurationError
from .base import INF, BandedDistanceMeasure, DistanceMeasure
from .configs import build_dtw_params, build_erp_params, build_erp_space, window_sizes
from .dtw import DTWDistance
from .erp import ERPDistance
from .neighbours import nearest_neighbour, pairwise_distances

MEASURES: Dict[str, Type[BandedDistanceMeasure]] = {
    ERPDistance.name: ERPDistance,
    DTWDistance.name: DTWDistance,
}


def build_measure(config: DistanceConfig) -> BandedDistanceMeasure:
    """
    Instantiate the measure described by a distance configuration.

    Raises:
        ConfigurationError: If the measure name is unknown
    """
    measure_cls = MEASURES.get(config.measure.lower())
    if measure_cls is None:
        raise ConfigurationError(
            f"Unknown distance measure: {config.measure!r} (known: {sorted(MEASURES)})"
        )
    kwargs: Dict[str, Any] = {"window_size": config.window_size, "keep_matrix": config.keep_matrix}
    if measure_cls is ERPDistance:
        kwargs["penalty"] = config.penalty
    return measure_cls(**kwargs)


__all__ = [
    "INF",
    "DistanceMeasure",
    "BandedDistanceMeasure",
    "ERPDistance",
    "DTWDistance",
    "MEASURES",
    "build_measure",
    "build_erp_params",
    "build_erp_space",
    "build_dtw_params",
    "window_sizes",
    "nearest_neighbour",
    "pairwise_distances",
]
