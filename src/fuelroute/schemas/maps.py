"""Road map request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .routing import RouteSegmentModel


class SegmentInput(BaseModel):
    origin: str = Field(..., description="Point the segment leaves from.")
    destination: str = Field(..., description="Point the segment arrives at.")
    distance_km: float = Field(..., description="Road distance in kilometres.")


class RouteMapRequest(BaseModel):
    id: Optional[int] = Field(
        default=None,
        description="Id of the map to replace. Omit to insert, or to replace the map with the same name.",
    )
    name: str
    segments: List[SegmentInput] = Field(default_factory=list)


class RouteMapModel(BaseModel):
    id: int
    name: str
    segments: List[RouteSegmentModel]


class RouteMapSummary(BaseModel):
    id: int
    name: str
    segment_count: int
    points: List[str]
