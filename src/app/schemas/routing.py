"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class RoutingRequest(BaseModel):
    start: Optional[LatLng] = Field(
        default=None,
        description="Rider's current location. Defaults to the configured route start.",
    )
    order_ids: Optional[List[str]] = Field(
        default=None,
        description="Restrict the route to these orders. All orders matching the status filter otherwise.",
    )
    status: Optional[str] = Field(default=None, description="Only route orders in this status.")
    include_vendor_dropoffs: bool = Field(
        default=True,
        description="Add one drop-off per assigned vendor with known coordinates.",
    )
    persist: bool = False
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")


class RouteStopModel(BaseModel):
    sequence: int
    stop_id: str
    name: str
    kind: str
    latitude: float
    longitude: float
    order_id: Optional[str] = None
    vendor_name: Optional[str] = None
    leg_km: float
    cumulative_km: float


class RoutingResponse(BaseModel):
    start: LatLng
    total_distance_km: float
    estimated_minutes: int
    stop_count: int
    maps_url: Optional[str] = None
    skipped_order_ids: List[str]
    metadata: dict
    stops: List[RouteStopModel]
