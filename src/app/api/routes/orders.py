"""Order endpoints."""

from __future__ import annotations

import logging
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...data.orders_repository import fetch_orders, get_order
from ...models.domain import Order, OrderStatus
from ...persistence.orders import assign_vendor_to_order, clear_order_vendor, update_order_status
from ...schemas.orders import (
    AssignmentOutcomeModel,
    OrderModel,
    OrderUpdateResponse,
    OrdersResponse,
    StatusUpdateRequest,
    VendorUpdateRequest,
)
from ...services.assignment import AssignmentOutcome, AutoAssignmentCoordinator
from ...services.notifications import RiderNotifier
from ...services.validation import is_valid_order_status
from ..dependencies import enforce_rate_limit, get_coordinator, get_notifier

router = APIRouter(prefix="/orders", tags=["orders"], dependencies=[Depends(enforce_rate_limit)])

logger = logging.getLogger(__name__)


def _require_order(order_id: str) -> Order:
    order = get_order(order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Order {order_id} not found")
    return order


def _outcome_model(outcome: AssignmentOutcome) -> AssignmentOutcomeModel | None:
    if not outcome.fired and not outcome.message:
        return None
    return AssignmentOutcomeModel(
        fired=outcome.fired,
        success=outcome.success,
        vendor=outcome.vendor.name if outcome.vendor else None,
        vendor_area=outcome.vendor.area if outcome.vendor else None,
        rule=outcome.rule.value if outcome.rule else None,
        message=outcome.message,
    )


@router.get("", response_model=OrdersResponse)
def list_orders(
    status_filter: str | None = Query(default=None, alias="status", description="Only orders in this status"),
) -> OrdersResponse:
    orders = fetch_orders(status_filter)
    return OrdersResponse(orders=[OrderModel.from_order(order) for order in orders])


@router.get("/{order_id}", response_model=OrderModel)
def read_order(order_id: str) -> OrderModel:
    return OrderModel.from_order(_require_order(order_id))


@router.post("/{order_id}/status", response_model=OrderUpdateResponse)
def change_status(
    order_id: str,
    payload: StatusUpdateRequest,
    coordinator: AutoAssignmentCoordinator = Depends(get_coordinator),
    notifier: RiderNotifier = Depends(get_notifier),
) -> OrderUpdateResponse:
    if not is_valid_order_status(payload.status):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid status '{payload.status}'")

    order = _require_order(order_id)
    coordinator.sync(order)
    new_status = payload.status.strip().lower()

    result = update_order_status(order.id, new_status)
    if not result.success:
        return OrderUpdateResponse(success=False, message=result.message, order_id=order.id)

    updated = replace(order, status=new_status)
    notification = None
    if new_status == OrderStatus.APPROVED.value and order.status != new_status and notifier.enabled:
        notification = notifier.notify_approved(updated).message

    outcome = coordinator.observe(updated)
    return OrderUpdateResponse(
        success=True,
        message=f"Order {order.id} status updated to {new_status}",
        order_id=order.id,
        notification=notification,
        assignment=_outcome_model(outcome),
    )


@router.post("/{order_id}/vendor", response_model=OrderUpdateResponse)
def change_vendor(
    order_id: str,
    payload: VendorUpdateRequest,
    coordinator: AutoAssignmentCoordinator = Depends(get_coordinator),
) -> OrderUpdateResponse:
    order = _require_order(order_id)
    coordinator.sync(order)
    vendor_name = (payload.vendor or "").strip()

    result = assign_vendor_to_order(order.id, vendor_name) if vendor_name else clear_order_vendor(order.id)
    if not result.success:
        return OrderUpdateResponse(success=False, message=result.message, order_id=order.id)

    outcome = coordinator.observe(replace(order, assigned_vendor=vendor_name or None))
    message = f"Vendor {vendor_name} assigned to order {order.id}" if vendor_name else f"Vendor cleared from order {order.id}"
    return OrderUpdateResponse(
        success=True,
        message=message,
        order_id=order.id,
        assignment=_outcome_model(outcome),
    )


@router.post("/{order_id}/auto-assign", response_model=OrderUpdateResponse)
def auto_assign(
    order_id: str,
    coordinator: AutoAssignmentCoordinator = Depends(get_coordinator),
) -> OrderUpdateResponse:
    order = _require_order(order_id)
    if order.status != OrderStatus.APPROVED.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Vendor assignment is pending order approval",
        )

    try:
        outcome = coordinator.retry(order)
    except Exception as exc:
        logger.exception("Error auto-assigning order %s: %s", order_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to auto-assign vendor: {str(exc)}",
        ) from exc

    return OrderUpdateResponse(
        success=outcome.success,
        message=outcome.message,
        order_id=order.id,
        assignment=_outcome_model(outcome),
    )
