"""Error types raised by the route planner."""

from __future__ import annotations


class LogisticsError(Exception):
    """Base class for every error the service reports back to clients."""


class RouteConfigurationError(LogisticsError, ValueError):
    """A search cannot start because its inputs or its map are unusable."""


class MapValidationError(LogisticsError, ValueError):
    """A map payload was rejected before reaching the store."""


class MapStorageError(LogisticsError):
    """The map store could not be read or written."""


class RouteNotFoundError(LogisticsError):
    """No stored map connects the requested origin to the destination."""
