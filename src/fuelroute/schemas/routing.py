"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class CheapestRouteRequest(BaseModel):
    origin: str = Field(..., description="Name of the starting point.")
    destination: str = Field(..., description="Name of the point to reach.")
    fuel_economy_km_per_liter: float = Field(..., description="Distance the vehicle covers per liter, e.g. 13.5.")
    fuel_cost_per_liter: float = Field(..., description="Price of one liter of fuel, e.g. 3.20.")
    max_generations: Optional[int] = Field(default=None, ge=0, description="Overrides the configured generation cap.")
    timeout_ms: Optional[int] = Field(default=None, ge=0, description="Overrides the configured per-map time budget.")
    random_seed: Optional[int] = Field(default=None, description="Seed for a reproducible search.")


class RouteSegmentModel(BaseModel):
    id: int
    origin: str
    destination: str
    distance_km: float


class CheapestRouteResponse(BaseModel):
    segments: List[RouteSegmentModel]
    waypoints: List[str]
    total_cost: float
