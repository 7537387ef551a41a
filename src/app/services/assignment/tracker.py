"""Per-order auto-assignment state.

A tracker lives as long as its owner (one coordinator per app instance), so
"already attempted" only holds within that lifetime; a restart forgets it.
At most one attempt fires per approval while it succeeds, and a failed attempt
re-arms the tracker so a manual retry can fire again.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ...models.domain import OrderStatus


class AssignmentState(str, Enum):
    NO_VENDOR = "no_vendor"
    ATTEMPT_IN_FLIGHT = "attempt_in_flight"
    ATTEMPTED = "attempted"


class AssignmentTracker:
    def __init__(self, status: str | None = None, assigned_vendor: str | None = None) -> None:
        self.state = AssignmentState.NO_VENDOR
        self._previous_status: Optional[str] = status
        self._previous_vendor: Optional[str] = assigned_vendor or None

    def observe(self, status: str, assigned_vendor: str | None) -> bool:
        """Record the latest order snapshot and report whether an attempt should fire."""

        vendor = assigned_vendor or None
        if self._previous_vendor and not vendor:
            self.state = AssignmentState.NO_VENDOR

        just_approved = status == OrderStatus.APPROVED.value and self._previous_status != OrderStatus.APPROVED.value
        should_fire = just_approved and vendor is None and self.state == AssignmentState.NO_VENDOR

        self._previous_status = status
        self._previous_vendor = vendor
        return should_fire

    def sync(self, status: str, assigned_vendor: str | None) -> None:
        """Adopt a freshly loaded snapshot without firing an attempt."""

        self.observe(status, assigned_vendor)

    def can_retry(self, assigned_vendor: str | None) -> bool:
        return not assigned_vendor and self.state == AssignmentState.NO_VENDOR

    def begin(self) -> None:
        self.state = AssignmentState.ATTEMPT_IN_FLIGHT

    def succeed(self, vendor_name: str) -> None:
        self.state = AssignmentState.ATTEMPTED
        self._previous_vendor = vendor_name

    def fail(self) -> None:
        self.state = AssignmentState.NO_VENDOR
