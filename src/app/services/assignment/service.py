"""Automatic vendor assignment for newly approved orders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ...data.vendors_repository import load_vendors
from ...models.domain import Order, Vendor
from ...persistence.orders import UpdateResult, assign_vendor_to_order
from ..validation import extract_postcode
from ..vendors.matcher import MatchRule, match_vendor
from .tracker import AssignmentState, AssignmentTracker

logger = logging.getLogger(__name__)

VendorLoader = Callable[[], Sequence[Vendor]]
VendorWriter = Callable[[str, str], UpdateResult]


@dataclass(slots=True)
class AssignmentOutcome:
    fired: bool
    success: bool = False
    vendor: Optional[Vendor] = None
    rule: Optional[MatchRule] = None
    message: str = ""


class AutoAssignmentCoordinator:
    """Holds one tracker per order and runs the vendor matcher when one fires.

    Construct one per application instance; tests build their own with fake
    loaders and writers.
    """

    def __init__(
        self,
        vendor_loader: VendorLoader | None = None,
        vendor_writer: VendorWriter | None = None,
        max_trackers: int = 1000,
    ) -> None:
        self._load_vendors = vendor_loader or load_vendors
        self._write_vendor = vendor_writer or assign_vendor_to_order
        self._max_trackers = max(1, max_trackers)
        self._trackers: dict[str, AssignmentTracker] = {}

    def __len__(self) -> int:
        return len(self._trackers)

    def tracker_for(self, order: Order) -> AssignmentTracker:
        tracker = self._trackers.get(order.id)
        if tracker is None:
            if len(self._trackers) >= self._max_trackers:
                self._evict()
            tracker = AssignmentTracker(order.status, order.assigned_vendor)
            self._trackers[order.id] = tracker
        return tracker

    def sync(self, order: Order) -> AssignmentTracker:
        """Bring the order's tracker in line with a freshly loaded snapshot."""

        tracker = self.tracker_for(order)
        tracker.sync(order.status, order.assigned_vendor)
        return tracker

    def _evict(self) -> int:
        # Settled trackers go first; a tracker re-seeded from the stored vendor behaves the same.
        doomed = [order_id for order_id, tracker in self._trackers.items() if tracker.state == AssignmentState.ATTEMPTED]
        if not doomed:
            doomed = [
                order_id
                for order_id, tracker in self._trackers.items()
                if tracker.state == AssignmentState.NO_VENDOR
            ][:1]
        for order_id in doomed:
            del self._trackers[order_id]
        if doomed:
            logger.debug("Dropped %d assignment trackers", len(doomed))
        return len(doomed)

    def state_of(self, order_id: str) -> AssignmentState:
        tracker = self._trackers.get(order_id)
        return tracker.state if tracker else AssignmentState.NO_VENDOR

    def observe(self, order: Order) -> AssignmentOutcome:
        """Feed the latest order snapshot; fires one attempt on a fresh approval."""

        tracker = self.tracker_for(order)
        if not tracker.observe(order.status, order.assigned_vendor):
            return AssignmentOutcome(fired=False)
        logger.info("Auto-assignment triggered for order %s", order.id)
        return self._attempt(order, tracker)

    def retry(self, order: Order) -> AssignmentOutcome:
        """Manual trigger; fires only while the order has no vendor and no attempt on record."""

        tracker = self.tracker_for(order)
        tracker.observe(order.status, order.assigned_vendor)
        if not tracker.can_retry(order.assigned_vendor):
            return AssignmentOutcome(fired=False, message="Vendor already assigned or attempted")
        return self._attempt(order, tracker)

    def _attempt(self, order: Order, tracker: AssignmentTracker) -> AssignmentOutcome:
        tracker.begin()
        try:
            vendors = list(self._load_vendors())
        except Exception:
            logger.exception("Loading vendors failed for order %s", order.id)
            tracker.fail()
            return AssignmentOutcome(fired=True, message="Failed to load vendors. Please assign manually.")

        if not vendors:
            logger.info("No vendors available for auto-assignment")
            tracker.fail()
            return AssignmentOutcome(fired=True, message="No vendors available")

        postcode = order.postcode or extract_postcode(order.pickup_address)
        service_type = order.service or "standard"
        match = match_vendor(postcode, order.coordinates, service_type, vendors)
        if match is None:
            logger.info("No suitable vendor found for order %s", order.id)
            tracker.fail()
            return AssignmentOutcome(fired=True, message="No suitable vendor found")

        result = self._write_vendor(order.id, match.vendor.name)
        if not result.success:
            tracker.fail()
            return AssignmentOutcome(
                fired=True,
                vendor=match.vendor,
                rule=match.rule,
                message=result.message,
            )

        tracker.succeed(match.vendor.name)
        logger.info(
            "Assigned %s (%s) to order %s by rule %s",
            match.vendor.name,
            match.vendor.area,
            order.id,
            match.rule.value,
        )
        return AssignmentOutcome(
            fired=True,
            success=True,
            vendor=match.vendor,
            rule=match.rule,
            message=f"{match.vendor.name} ({match.vendor.area}) assigned",
        )
