"""Order field updates against the Supabase orders table.

Every write is an independent update by order id; concurrent writers simply
overwrite each other. Failures are reported through ``UpdateResult`` and
never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..config import settings
from ..db.supabase import get_supabase_client
from ..services.validation import is_valid_order_status

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateResult:
    success: bool
    message: str


def _update_order(order_id: str, fields: dict[str, Any]) -> UpdateResult:
    supabase = get_supabase_client()
    if not supabase:
        logger.warning("Supabase not configured - order %s was not updated", order_id)
        return UpdateResult(False, "Database not configured")

    try:
        supabase.table(settings.orders_table).update(fields).eq("id", order_id).execute()
    except Exception as e:
        logger.error("Failed to update order %s with %s: %s", order_id, fields, e)
        return UpdateResult(False, "Failed to complete operation.")

    logger.info("Updated order %s: %s", order_id, fields)
    return UpdateResult(True, "Operation completed successfully")


def update_order_status(order_id: str, status: str) -> UpdateResult:
    if not order_id or not str(order_id).strip():
        return UpdateResult(False, "Invalid order id")
    if not is_valid_order_status(status):
        logger.error("Invalid status for order %s: %r", order_id, status)
        return UpdateResult(False, "Invalid status")
    return _update_order(str(order_id).strip(), {"status": status.strip().lower()})


def assign_vendor_to_order(order_id: str, vendor_name: str) -> UpdateResult:
    if not order_id or not str(order_id).strip():
        return UpdateResult(False, "Invalid order id")
    if not vendor_name or not vendor_name.strip():
        logger.error("Invalid vendor name for order %s: %r", order_id, vendor_name)
        return UpdateResult(False, "Invalid vendor name")
    return _update_order(str(order_id).strip(), {"vendor": vendor_name.strip()})


def clear_order_vendor(order_id: str) -> UpdateResult:
    if not order_id or not str(order_id).strip():
        return UpdateResult(False, "Invalid order id")
    return _update_order(str(order_id).strip(), {"vendor": None})
