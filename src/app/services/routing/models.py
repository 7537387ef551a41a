"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class StopKind(str, Enum):
    PICKUP = "pickup"
    DROPOFF = "dropoff"


@dataclass(slots=True)
class RouteStop:
    """A customer pickup or vendor drop-off with known coordinates."""

    stop_id: str
    name: str
    kind: StopKind
    latitude: float
    longitude: float
    order_id: Optional[str] = None
    vendor_name: Optional[str] = None

    @property
    def location(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(slots=True)
class SequencedStop:
    stop: RouteStop
    sequence: int
    leg_km: float
    cumulative_km: float


@dataclass(slots=True)
class RoutePlan:
    start: tuple[float, float]
    stops: List[SequencedStop]
    total_distance_km: float
    estimated_minutes: int
    maps_url: Optional[str]
    skipped_order_ids: List[str] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)
