"""Order loading from the Supabase orders table."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Order, OrderStatus
from ..services.regions import classify_region
from ..services.validation import extract_postcode

logger = logging.getLogger(__name__)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def order_from_row(row: dict) -> Order:
    """Map an orders table row to an Order, applying every default once."""

    latitude = _optional_float(row.get("latitude"))
    longitude = _optional_float(row.get("longitude"))
    if latitude is None or longitude is None:
        latitude = longitude = None

    pickup_address = _optional_str(row.get("pickup_address")) or ""
    postcode = _optional_str(row.get("postcode")) or extract_postcode(pickup_address)
    coordinates = (latitude, longitude) if latitude is not None else None

    region = _optional_str(row.get("region"))
    if region is None and (postcode or coordinates):
        region = classify_region(postcode, coordinates).value

    return Order(
        id=str(row.get("id")),
        name=_optional_str(row.get("name")) or "Unknown",
        phone=_optional_str(row.get("phone")) or "Unknown",
        pickup_address=pickup_address,
        pickup_date=_optional_str(row.get("pickup_date")) or "",
        status=(_optional_str(row.get("status")) or OrderStatus.PENDING.value).lower(),
        service=_optional_str(row.get("service")) or "",
        assigned_vendor=_optional_str(row.get("vendor")),
        latitude=latitude,
        longitude=longitude,
        postcode=postcode,
        region=region,
        order_type=_optional_str(row.get("order_type")),
        delivery_type=_optional_str(row.get("delivery_type")),
        rider_fee=_optional_float(row.get("rider_fee")),
        rider_payout=_optional_float(row.get("rider_payout")),
        created_at=_optional_str(row.get("created_at")),
        raw=dict(row),
    )


def fetch_orders(status_filter: str | None = None) -> list[Order]:
    """Load orders newest first, optionally restricted to one status."""

    supabase = get_supabase_client()
    if not supabase:
        logger.warning("Supabase not configured - no orders available")
        return []

    try:
        query = supabase.table(settings.orders_table).select("*").order("created_at", desc=True)
        if status_filter and status_filter.strip():
            query = query.eq("status", status_filter.strip())
        response = query.execute()
    except Exception as e:
        logger.error(f"Failed to fetch orders: {e}")
        return []

    orders: list[Order] = []
    for row in response.data or []:
        if row.get("id") is None:
            logger.warning("Skipping order row without id")
            continue
        orders.append(order_from_row(row))
    return orders


def get_order(order_id: str) -> Optional[Order]:
    supabase = get_supabase_client()
    if not supabase:
        return None

    try:
        response = supabase.table(settings.orders_table).select("*").eq("id", order_id).limit(1).execute()
    except Exception as e:
        logger.error(f"Failed to fetch order {order_id}: {e}")
        return None
    if not response.data:
        return None
    return order_from_row(response.data[0])
