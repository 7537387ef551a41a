"""Rider notification webhook."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import httpx

from ...config import settings
from ...models.domain import Order
from ...persistence.orders import UpdateResult

logger = logging.getLogger(__name__)


def build_rider_notification(order: Order, *, today: Optional[date] = None) -> dict:
    """Payload sent to riders when an order is approved for pickup."""

    payout = order.rider_fee if order.rider_fee is not None else order.rider_payout
    payout = payout or 0.0
    return {
        "action": "approve_payment",
        "pickup-address": order.pickup_address or "",
        "postcode": order.postcode or "",
        "delivery-type": order.delivery_type or "Standard",
        "order_type": order.order_type or "Regular",
        "rider_payout": f"{payout:.2f}" if payout > 0 else "0.00",
        "date": order.pickup_date or (today or date.today()).isoformat(),
    }


class RiderNotifier:
    """Posts approval notifications to the configured rider webhook."""

    def __init__(
        self,
        webhook_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.webhook_url = webhook_url or settings.rider_webhook_url
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def notify_approved(self, order: Order) -> UpdateResult:
        if not self.enabled:
            return UpdateResult(False, "Rider webhook not configured")

        payload = build_rider_notification(order)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Rider notification for order %s failed: %s", order.id, e)
            return UpdateResult(False, "Notification failed but order updated")

        logger.info("Rider notification sent for order %s", order.id)
        return UpdateResult(True, "Rider notification sent")
