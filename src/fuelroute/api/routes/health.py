"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/store", status_code=status.HTTP_200_OK)
def health_store() -> dict:
    """Check that the map store can be read."""
    from ...exceptions import MapStorageError
    from ...persistence.maps import MapRepository

    try:
        repository = MapRepository()
        maps = repository.read_all_maps()
    except (MapStorageError, OSError) as exc:
        return {"service": "map-store", "healthy": False, "error": str(exc)}
    return {
        "service": "map-store",
        "healthy": True,
        "path": str(repository.path),
        "maps_count": len(maps),
    }
