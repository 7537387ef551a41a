"""Route planning service combining orders, vendors and the sequencer."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...data.orders_repository import fetch_orders
from ...data.vendors_repository import load_vendors
from ...models.domain import Order, Vendor
from ...persistence.filesystem import FileStorage
from ...schemas.routing import LatLng, RouteStopModel, RoutingRequest, RoutingResponse
from ..outputs.routing_formatter import google_maps_directions_url, route_plan_to_csv, route_plan_to_json
from .models import RoutePlan, RouteStop, StopKind
from .sequencer import sequence_route

logger = logging.getLogger(__name__)


def build_route_stops(
    orders: Sequence[Order],
    vendors: Sequence[Vendor],
    *,
    include_vendor_dropoffs: bool = True,
) -> tuple[list[RouteStop], list[str]]:
    """Build pickup and drop-off stops, returning them with ids of orders lacking GPS."""

    stops: list[RouteStop] = []
    skipped: list[str] = []
    for order in orders:
        coordinates = order.coordinates
        if coordinates is None:
            skipped.append(order.id)
            continue
        stops.append(
            RouteStop(
                stop_id=f"pickup:{order.id}",
                name=f"{order.name} - {order.id}",
                kind=StopKind.PICKUP,
                latitude=coordinates[0],
                longitude=coordinates[1],
                order_id=order.id,
            )
        )

    if not include_vendor_dropoffs:
        return stops, skipped

    vendors_by_name = {vendor.name: vendor for vendor in vendors}
    seen: set[str] = set()
    for order in orders:
        name = order.assigned_vendor
        if not name or name in seen:
            continue
        seen.add(name)
        vendor = vendors_by_name.get(name)
        if vendor is None or vendor.coordinates is None:
            logger.info("Vendor %s has no coordinates, drop-off not routed", name)
            continue
        stops.append(
            RouteStop(
                stop_id=f"dropoff:{vendor.name}",
                name=f"{vendor.name} (Vendor)",
                kind=StopKind.DROPOFF,
                latitude=vendor.latitude,
                longitude=vendor.longitude,
                vendor_name=vendor.name,
            )
        )
    return stops, skipped


def plan_route_for(
    start: tuple[float, float],
    orders: Sequence[Order],
    vendors: Sequence[Vendor],
    *,
    include_vendor_dropoffs: bool = True,
) -> RoutePlan:
    stops, skipped = build_route_stops(orders, vendors, include_vendor_dropoffs=include_vendor_dropoffs)
    sequenced = sequence_route(start, stops)
    total = sequenced[-1].cumulative_km if sequenced else 0.0
    return RoutePlan(
        start=start,
        stops=sequenced,
        total_distance_km=total,
        estimated_minutes=round(total * settings.minutes_per_km),
        maps_url=google_maps_directions_url(start, sequenced),
        skipped_order_ids=skipped,
        metadata={
            "algorithm": "nearest_neighbor",
            "pickups": sum(1 for stop in stops if stop.kind == StopKind.PICKUP),
            "dropoffs": sum(1 for stop in stops if stop.kind == StopKind.DROPOFF),
        },
    )


def _select_orders(payload: RoutingRequest) -> list[Order]:
    orders = fetch_orders(payload.status)
    if payload.order_ids is None:
        return orders
    wanted = set(payload.order_ids)
    return [order for order in orders if order.id in wanted]


def _to_response(plan: RoutePlan) -> RoutingResponse:
    return RoutingResponse(
        start=LatLng(latitude=plan.start[0], longitude=plan.start[1]),
        total_distance_km=plan.total_distance_km,
        estimated_minutes=plan.estimated_minutes,
        stop_count=len(plan.stops),
        maps_url=plan.maps_url,
        skipped_order_ids=plan.skipped_order_ids,
        metadata=plan.metadata,
        stops=[
            RouteStopModel(
                sequence=item.sequence,
                stop_id=item.stop.stop_id,
                name=item.stop.name,
                kind=item.stop.kind.value,
                latitude=item.stop.latitude,
                longitude=item.stop.longitude,
                order_id=item.stop.order_id,
                vendor_name=item.stop.vendor_name,
                leg_km=item.leg_km,
                cumulative_km=item.cumulative_km,
            )
            for item in plan.stops
        ],
    )


def plan_route(payload: RoutingRequest) -> RoutingResponse:
    """Sequence the requested orders (and their vendors) from the rider's start point."""

    start = (payload.start.latitude, payload.start.longitude) if payload.start else settings.default_route_start
    orders = _select_orders(payload)
    vendors = load_vendors() if payload.include_vendor_dropoffs else []

    plan = plan_route_for(start, orders, vendors, include_vendor_dropoffs=payload.include_vendor_dropoffs)
    if payload.run_label:
        plan.metadata["run_label"] = payload.run_label
    if plan.skipped_order_ids:
        logger.warning("Orders without coordinates left out of route: %s", plan.skipped_order_ids)

    if payload.persist and plan.stops:
        run_dir = FileStorage().write_itinerary(
            route_plan_to_json(plan),
            route_plan_to_csv(plan),
            label=payload.run_label,
        )
        plan.metadata["output_dir"] = str(run_dir)
        logger.info("Route itinerary written to %s", run_dir)

    return _to_response(plan)
