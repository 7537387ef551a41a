import pytest

from src.app.models.domain import Order, Vendor, VendorRole
from src.app.persistence.orders import UpdateResult
from src.app.services.assignment import AssignmentState, AutoAssignmentCoordinator
from src.app.services.vendors import MatchRule

VENDORS = [
    Vendor(name="Season Laundry", area="Langkawi", postcode="07000", latitude=6.33, longitude=99.85, role=VendorRole.LANGKAWI_BULK),
    Vendor(name="Theresa Dry Cleaners", area="Langkawi", postcode="07000", role=VendorRole.LANGKAWI_ITEM),
    Vendor(name="Ampang Shoe Spa", area="Ampang", postcode="68000", latitude=3.15, longitude=101.76, role=VendorRole.KL_ITEM),
]


def _order(status: str = "processing", vendor: str | None = None, **overrides) -> Order:
    fields = dict(
        id="ORD-1",
        name="Aisyah",
        pickup_address="Jalan Pantai Cenang, 07000 Langkawi",
        postcode="07000",
        service="Wash & Fold 5kg",
        status=status,
        assigned_vendor=vendor,
        latitude=6.30,
        longitude=99.80,
    )
    fields.update(overrides)
    return Order(**fields)


class RecordingWriter:
    def __init__(self, results: list[UpdateResult] | None = None) -> None:
        self.calls: list[tuple[str, str]] = []
        self._results = list(results or [])

    def __call__(self, order_id: str, vendor_name: str) -> UpdateResult:
        self.calls.append((order_id, vendor_name))
        if self._results:
            return self._results.pop(0)
        return UpdateResult(True, "Operation completed successfully")


class CountingLoader:
    def __init__(self, vendors=VENDORS) -> None:
        self.calls = 0
        self._vendors = vendors

    def __call__(self):
        self.calls += 1
        return self._vendors


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def loader() -> CountingLoader:
    return CountingLoader()


def test_approval_assigns_vendor_once(loader, writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer)
    order = _order()
    coordinator.tracker_for(order)

    outcome = coordinator.observe(_order("approved"))

    assert outcome.fired and outcome.success
    assert outcome.vendor.name == "Season Laundry"
    assert outcome.rule == MatchRule.LANGKAWI_BULK
    assert outcome.message == "Season Laundry (Langkawi) assigned"
    assert writer.calls == [("ORD-1", "Season Laundry")]
    assert coordinator.state_of("ORD-1") == AssignmentState.ATTEMPTED

    again = coordinator.observe(_order("approved", "Season Laundry"))
    assert again.fired is False
    assert loader.calls == 1


def test_clear_and_reapprove_fires_one_more_attempt(loader, writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer)
    coordinator.tracker_for(_order())
    coordinator.observe(_order("approved"))

    assert coordinator.observe(_order("pending", None)).fired is False
    assert coordinator.observe(_order("approved", None)).fired is True
    assert len(writer.calls) == 2


def test_write_failure_rearms_and_retry_fires(loader):
    writer = RecordingWriter([UpdateResult(False, "Failed to complete operation.")])
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer)
    coordinator.tracker_for(_order())

    outcome = coordinator.observe(_order("approved"))
    assert outcome.fired and not outcome.success
    assert outcome.message == "Failed to complete operation."
    assert coordinator.state_of("ORD-1") == AssignmentState.NO_VENDOR

    retried = coordinator.retry(_order("approved"))
    assert retried.success
    assert len(writer.calls) == 2


def test_retry_refused_once_vendor_assigned(loader, writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer)

    outcome = coordinator.retry(_order("approved", "Theresa Dry Cleaners"))

    assert outcome.fired is False
    assert outcome.message == "Vendor already assigned or attempted"
    assert writer.calls == []


def test_no_vendors_available(writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=CountingLoader([]), vendor_writer=writer)
    coordinator.tracker_for(_order())

    outcome = coordinator.observe(_order("approved"))

    assert outcome.fired and not outcome.success
    assert outcome.message == "No vendors available"
    assert coordinator.state_of("ORD-1") == AssignmentState.NO_VENDOR
    assert writer.calls == []


def test_no_suitable_vendor(writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=CountingLoader(VENDORS), vendor_writer=writer)
    order = _order(postcode="", pickup_address="Somewhere", latitude=None, longitude=None)
    coordinator.tracker_for(order)

    outcome = coordinator.observe(_order("approved", postcode="", pickup_address="Somewhere", latitude=None, longitude=None))

    assert outcome.message == "No suitable vendor found"
    assert not outcome.success


def test_loader_error_is_reported_not_raised(writer):
    def broken_loader():
        raise RuntimeError("sheet unavailable")

    coordinator = AutoAssignmentCoordinator(vendor_loader=broken_loader, vendor_writer=writer)
    coordinator.tracker_for(_order())

    outcome = coordinator.observe(_order("approved"))

    assert outcome.message == "Failed to load vendors. Please assign manually."
    assert coordinator.state_of("ORD-1") == AssignmentState.NO_VENDOR


def test_postcode_is_taken_from_address_when_missing(loader, writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer)
    order = _order(postcode="", service="Shoe Cleaning")
    coordinator.tracker_for(order)

    outcome = coordinator.observe(_order("approved", postcode="", service="Shoe Cleaning"))

    assert outcome.vendor.name == "Theresa Dry Cleaners"


def test_coordinators_do_not_share_state(loader, writer):
    first = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer)
    second = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer)
    first.tracker_for(_order())
    first.observe(_order("approved"))

    assert first.state_of("ORD-1") == AssignmentState.ATTEMPTED
    assert second.state_of("ORD-1") == AssignmentState.NO_VENDOR


def test_sync_follows_external_changes_before_next_approval(loader, writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer)
    coordinator.sync(_order())
    assert coordinator.observe(_order("approved")).success

    coordinator.sync(_order("processing", None))

    assert coordinator.state_of("ORD-1") == AssignmentState.NO_VENDOR
    assert coordinator.observe(_order("approved")).fired is True
    assert len(writer.calls) == 2


def test_settled_trackers_are_dropped_at_capacity(loader, writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer, max_trackers=2)
    for order_id in ("ORD-1", "ORD-2"):
        coordinator.sync(_order(id=order_id))
        assert coordinator.observe(_order("approved", id=order_id)).success
    assert len(coordinator) == 2

    coordinator.sync(_order(id="ORD-3"))

    assert len(coordinator) == 1
    assert coordinator.state_of("ORD-1") == AssignmentState.NO_VENDOR
    assert coordinator.observe(_order("approved", id="ORD-3")).fired is True


def test_tracker_count_stays_bounded_without_settled_orders(loader, writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer, max_trackers=3)

    for index in range(10):
        coordinator.sync(_order("pending", id=f"ORD-{index}"))

    assert len(coordinator) == 3


def test_in_flight_tracker_is_kept_at_capacity(loader, writer):
    coordinator = AutoAssignmentCoordinator(vendor_loader=loader, vendor_writer=writer, max_trackers=1)
    coordinator.tracker_for(_order(id="ORD-1")).begin()

    coordinator.sync(_order(id="ORD-2"))

    assert coordinator.state_of("ORD-1") == AssignmentState.ATTEMPT_IN_FLIGHT
    assert len(coordinator) == 2
