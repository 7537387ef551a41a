import json
from datetime import date

import httpx

from src.app.models.domain import Order
from src.app.services.notifications import RiderNotifier, build_rider_notification


def _order(**overrides) -> Order:
    fields = dict(
        id="42",
        pickup_address="Jalan Pantai Cenang, 07000 Langkawi",
        postcode="07000",
        status="approved",
        rider_fee=12.5,
    )
    fields.update(overrides)
    return Order(**fields)


def test_payload_defaults():
    payload = build_rider_notification(_order(rider_fee=None), today=date(2024, 5, 1))

    assert payload == {
        "action": "approve_payment",
        "pickup-address": "Jalan Pantai Cenang, 07000 Langkawi",
        "postcode": "07000",
        "delivery-type": "Standard",
        "order_type": "Regular",
        "rider_payout": "0.00",
        "date": "2024-05-01",
    }


def test_payload_prefers_rider_fee_and_pickup_date():
    payload = build_rider_notification(
        _order(rider_payout=9.0, pickup_date="2024-06-10", delivery_type="Express", order_type="Subscription")
    )

    assert payload["rider_payout"] == "12.50"
    assert payload["date"] == "2024-06-10"
    assert payload["delivery-type"] == "Express"
    assert payload["order_type"] == "Subscription"


def test_payload_falls_back_to_rider_payout():
    payload = build_rider_notification(_order(rider_fee=None, rider_payout=7))

    assert payload["rider_payout"] == "7.00"


def test_disabled_without_url():
    notifier = RiderNotifier(webhook_url="")
    notifier.webhook_url = None

    result = notifier.notify_approved(_order())

    assert notifier.enabled is False
    assert result.success is False
    assert result.message == "Rider webhook not configured"


def test_posts_payload():
    received = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append((request.method, str(request.url), json.loads(request.content)))
        return httpx.Response(200, json={"ok": True})

    notifier = RiderNotifier(
        webhook_url="https://hooks.example/rider",
        transport=httpx.MockTransport(handler),
    )

    result = notifier.notify_approved(_order())

    assert result.success is True
    assert result.message == "Rider notification sent"
    method, url, body = received[0]
    assert method == "POST"
    assert url == "https://hooks.example/rider"
    assert body["action"] == "approve_payment"
    assert body["rider_payout"] == "12.50"


def test_webhook_error_does_not_raise():
    notifier = RiderNotifier(
        webhook_url="https://hooks.example/rider",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )

    result = notifier.notify_approved(_order())

    assert result.success is False
    assert result.message == "Notification failed but order updated"
