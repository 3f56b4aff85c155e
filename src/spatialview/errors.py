"""Exception types raised for configuration failures.

Recoverable problems (a point that does not project, a payload the geometry
engine rejects) are logged and never raised; only the configuration errors
below reach the caller.
"""


class SpatialError(Exception):
    """Base class for spatialview errors."""


class UnsupportedProjectionError(SpatialError, ValueError):
    """Requested projection kind is not part of the registry."""


class TransformationError(SpatialError, RuntimeError):
    """A coordinate transform pair or the viewport affine could not be built."""


class ConverterStateError(SpatialError, RuntimeError):
    """Converter used before a projection was configured."""
