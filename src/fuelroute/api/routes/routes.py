"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...exceptions import LogisticsError
from ...schemas.routing import CheapestRouteRequest, CheapestRouteResponse
from ...services.routing.service import find_cheapest_route

router = APIRouter(prefix="/routes", tags=["routes"])


def _search(payload: CheapestRouteRequest) -> CheapestRouteResponse:
    try:
        return find_cheapest_route(payload)
    except (LogisticsError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error searching for the cheapest route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to search for a route: {str(exc)}"
        ) from exc


@router.post("/cheapest", response_model=CheapestRouteResponse, status_code=status.HTTP_200_OK)
def cheapest_route(payload: CheapestRouteRequest) -> CheapestRouteResponse:
    return _search(payload)


@router.get(
    "/cheapest/{origin}/{destination}/{fuel_economy}/{fuel_cost}",
    response_model=CheapestRouteResponse,
    status_code=status.HTTP_200_OK,
)
def cheapest_route_by_path(
    origin: str,
    destination: str,
    fuel_economy: float,
    fuel_cost: float,
) -> CheapestRouteResponse:
    """Same search as ``POST /routes/cheapest`` with the inputs in the URL."""
    payload = CheapestRouteRequest(
        origin=origin,
        destination=destination,
        fuel_economy_km_per_liter=fuel_economy,
        fuel_cost_per_liter=fuel_cost,
    )
    return _search(payload)
