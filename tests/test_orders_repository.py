from types import SimpleNamespace

import pytest

from src.app.data import orders_repository
from src.app.data.orders_repository import fetch_orders, get_order, order_from_row


class FakeQuery:
    def __init__(self, rows, calls):
        self._rows = rows
        self.calls = calls

    def select(self, *args, **kwargs):
        self.calls.append(("select", args))
        return self

    def order(self, column, desc=False):
        self.calls.append(("order", column, desc))
        return self

    def eq(self, column, value):
        self.calls.append(("eq", column, value))
        self._rows = [row for row in self._rows if row.get(column) == value]
        return self

    def limit(self, count):
        self.calls.append(("limit", count))
        self._rows = self._rows[:count]
        return self

    def execute(self):
        return SimpleNamespace(data=self._rows)


class FakeSupabase:
    def __init__(self, rows):
        self.rows = rows
        self.tables: list[str] = []
        self.calls: list[tuple] = []

    def table(self, name):
        self.tables.append(name)
        return FakeQuery(list(self.rows), self.calls)


ROWS = [
    {
        "id": 42,
        "name": "Aisyah",
        "phone": "+60 12-345 6789",
        "pickup_address": "Jalan Pantai Cenang, 07000 Langkawi",
        "status": "Approved",
        "service": "Wash & Fold 5kg",
        "vendor": "",
        "latitude": "6.30",
        "longitude": "99.80",
        "rider_fee": "12.5",
        "created_at": "2024-05-01T10:00:00Z",
    },
    {
        "id": 43,
        "status": "pending",
        "pickup_address": "No postcode here",
    },
]


def test_order_from_row_applies_defaults_once():
    order = order_from_row({"id": 7})

    assert order.id == "7"
    assert order.name == "Unknown"
    assert order.phone == "Unknown"
    assert order.status == "pending"
    assert order.assigned_vendor is None
    assert order.coordinates is None
    assert order.postcode == ""
    assert order.region is None


def test_order_from_row_parses_fields():
    order = order_from_row(ROWS[0])

    assert order.id == "42"
    assert order.status == "approved"
    assert order.postcode == "07000"
    assert order.region == "langkawi"
    assert order.coordinates == (6.30, 99.80)
    assert order.assigned_vendor is None
    assert order.rider_fee == 12.5
    assert order.raw["name"] == "Aisyah"


def test_order_from_row_keeps_explicit_region_and_postcode():
    order = order_from_row({"id": 1, "postcode": "53300", "region": "kl-central", "pickup_address": "x 07000"})

    assert order.postcode == "53300"
    assert order.region == "kl-central"


def test_partial_coordinates_are_dropped():
    order = order_from_row({"id": 1, "latitude": 3.1, "longitude": "not-a-number"})

    assert order.latitude is None
    assert order.longitude is None


def test_fetch_orders_without_client_returns_empty(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(orders_repository, "get_supabase_client", lambda: None)

    assert fetch_orders() == []


def test_fetch_orders_newest_first_with_status_filter(monkeypatch: pytest.MonkeyPatch):
    fake = FakeSupabase(ROWS)
    monkeypatch.setattr(orders_repository, "get_supabase_client", lambda: fake)

    orders = fetch_orders(" pending ")

    assert [order.id for order in orders] == ["43"]
    assert fake.tables == ["orders"]
    assert ("order", "created_at", True) in fake.calls
    assert ("eq", "status", "pending") in fake.calls


def test_fetch_orders_skips_rows_without_id(monkeypatch: pytest.MonkeyPatch):
    fake = FakeSupabase(ROWS + [{"name": "ghost"}])
    monkeypatch.setattr(orders_repository, "get_supabase_client", lambda: fake)

    assert [order.id for order in fetch_orders()] == ["42", "43"]


def test_fetch_orders_swallows_query_errors(monkeypatch: pytest.MonkeyPatch):
    class Broken:
        def table(self, name):
            raise RuntimeError("connection reset")

    monkeypatch.setattr(orders_repository, "get_supabase_client", lambda: Broken())

    assert fetch_orders() == []


def test_get_order(monkeypatch: pytest.MonkeyPatch):
    fake = FakeSupabase(ROWS)
    monkeypatch.setattr(orders_repository, "get_supabase_client", lambda: fake)

    assert get_order(42).name == "Aisyah"
    assert get_order(999) is None
