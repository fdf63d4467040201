"""
warpgrid - elastic time series distances and index-addressable parameter grids.

Distances (ERP, DTW) run a banded dynamic program with early abandoning.
Parameter spaces describe nested product / union search spaces that can be
decoded from a single integer index and walked by grid or random search.
"""

from .exceptions import (
    ConfigurationError,
    EmptySearchSpaceError,
    InvalidIterationCountError,
    ParameterIndexError,
    PreconditionError,
    WarpGridError,
)
from .params import (
    Candidate,
    GridSearchIterator,
    IndexedParameterSpace,
    ParameterDimension,
    ParamSearchIterator,
    ParamSet,
    ParamSpace,
    RandomSearchIterator,
    build_iterator,
    load_param_space,
)
from .data import Dataset, TimeSeriesInstance
from .distances import (
    DTWDistance,
    DistanceMeasure,
    ERPDistance,
    build_dtw_params,
    build_erp_params,
    build_erp_space,
    build_measure,
    nearest_neighbour,
)
from .search import DistanceSweep, SweepResult
from .config import AppConfig, ConfigManager

__version__ = "0.1.0"

__all__ = [
    # Errors
    "WarpGridError",
    "PreconditionError",
    "ParameterIndexError",
    "InvalidIterationCountError",
    "ConfigurationError",
    "EmptySearchSpaceError",
    # Parameter spaces
    "Candidate",
    "ParameterDimension",
    "ParamSpace",
    "ParamSet",
    "IndexedParameterSpace",
    "ParamSearchIterator",
    "GridSearchIterator",
    "RandomSearchIterator",
    "build_iterator",
    "load_param_space",
    # Data
    "Dataset",
    "TimeSeriesInstance",
    # Distances
    "DistanceMeasure",
    "ERPDistance",
    "DTWDistance",
    "build_measure",
    "build_erp_params",
    "build_erp_space",
    "build_dtw_params",
    "nearest_neighbour",
    # Search
    "DistanceSweep",
    "SweepResult",
    # Config
    "AppConfig",
    "ConfigManager",
]
