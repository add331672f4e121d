"""Road map endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from ...exceptions import LogisticsError
from ...schemas.maps import RouteMapModel, RouteMapRequest, RouteMapSummary
from ...services.maps.service import get_map, list_maps, remove_map, store_map

router = APIRouter(prefix="/maps", tags=["maps"])


@router.post("", response_model=RouteMapModel, status_code=status.HTTP_200_OK)
def save(payload: RouteMapRequest) -> RouteMapModel:
    """Store a new map or replace the one with the same id or name."""
    try:
        return store_map(payload)
    except (LogisticsError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error storing map '{payload.name}': {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store map: {str(exc)}"
        ) from exc


@router.get("", response_model=List[RouteMapSummary], status_code=status.HTTP_200_OK)
def index() -> List[RouteMapSummary]:
    try:
        return list_maps()
    except LogisticsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/{name}", response_model=RouteMapModel, status_code=status.HTTP_200_OK)
def show(name: str) -> RouteMapModel:
    try:
        route_map = get_map(name)
    except LogisticsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if route_map is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map '{name}' not found")
    return route_map


@router.delete("/{name}", status_code=status.HTTP_200_OK)
def delete(name: str) -> dict:
    try:
        removed = remove_map(name)
    except LogisticsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map '{name}' not found")
    return {"success": True, "message": f"Map '{name}' removed"}
