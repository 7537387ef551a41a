"""Serializers for route plan outputs."""

from __future__ import annotations

import csv
import io
from typing import Sequence
from urllib.parse import urlencode

from ..routing.models import RoutePlan, SequencedStop

GOOGLE_MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


def google_maps_directions_url(start: tuple[float, float], plan_stops: Sequence[SequencedStop]) -> str | None:
    """Directions link from the start through every stop, ending at the last one."""

    if not plan_stops:
        return None
    origin = f"{start[0]},{start[1]}"
    last = plan_stops[-1].stop
    params = {
        "api": "1",
        "origin": origin,
        "destination": f"{last.latitude},{last.longitude}",
        "waypoints": "|".join(f"{item.stop.latitude},{item.stop.longitude}" for item in plan_stops),
        "travelmode": "driving",
    }
    return f"{GOOGLE_MAPS_DIRECTIONS_URL}?{urlencode(params, safe=',|')}"


def route_plan_to_json(plan: RoutePlan) -> dict:
    return {
        "start": {"latitude": plan.start[0], "longitude": plan.start[1]},
        "total_distance_km": plan.total_distance_km,
        "estimated_minutes": plan.estimated_minutes,
        "maps_url": plan.maps_url,
        "skipped_order_ids": list(plan.skipped_order_ids),
        "metadata": plan.metadata,
        "stops": [
            {
                "sequence": item.sequence,
                "stop_id": item.stop.stop_id,
                "name": item.stop.name,
                "kind": item.stop.kind.value,
                "latitude": item.stop.latitude,
                "longitude": item.stop.longitude,
                "order_id": item.stop.order_id,
                "vendor_name": item.stop.vendor_name,
                "leg_km": item.leg_km,
                "cumulative_km": item.cumulative_km,
            }
            for item in plan.stops
        ],
    }


def route_plan_to_csv(plan: RoutePlan) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "stop_id",
        "kind",
        "name",
        "order_id",
        "vendor_name",
        "latitude",
        "longitude",
        "leg_km",
        "cumulative_km",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for item in plan.stops:
        writer.writerow(
            {
                "sequence": item.sequence,
                "stop_id": item.stop.stop_id,
                "kind": item.stop.kind.value,
                "name": item.stop.name,
                "order_id": item.stop.order_id or "",
                "vendor_name": item.stop.vendor_name or "",
                "latitude": item.stop.latitude,
                "longitude": item.stop.longitude,
                "leg_km": round(item.leg_km, 3),
                "cumulative_km": round(item.cumulative_km, 3),
            }
        )
    return buffer.getvalue()
