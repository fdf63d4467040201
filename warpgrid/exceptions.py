"""
Exceptions for the warpgrid library.

Distinguishes caller contract violations (bad indices, bad iteration
counts), which are raised immediately at the call site, from configuration
problems found while loading YAML documents.

A pruned distance (``+inf`` returned because the result cannot beat the
caller's ``limit``) is a value, never an exception.
"""


class WarpGridError(Exception):
    """Base class for all warpgrid exceptions."""
    pass


class PreconditionError(WarpGridError, ValueError):
    """
    A caller broke an operation's precondition.

    Examples:
    - Decoding an index outside ``[0, size())``
    - Requesting a negative number of search iterations
    """
    pass


class ParameterIndexError(PreconditionError, IndexError):
    """Index outside the addressable range of a parameter space."""
    pass


class InvalidIterationCountError(PreconditionError):
    """Negative (or non-integer) iteration count for a search iterator."""
    pass


class ConfigurationError(WarpGridError):
    """Invalid configuration or parameter space document."""
    pass


class EmptySearchSpaceError(WarpGridError):
    """
    A search produced zero configurations where at least one is required.

    The indexing engine treats an empty space as valid. Callers that must
    select a best candidate raise this.
    """
    pass
