"""Route group exports."""

from . import health, maps, routes

__all__ = ["health", "maps", "routes"]
