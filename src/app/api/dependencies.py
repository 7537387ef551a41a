"""Request dependencies shared by the routers."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from ..services.assignment import AutoAssignmentCoordinator
from ..services.notifications import RiderNotifier
from ..services.rate_limit import RateLimiter

# Expired windows are swept once the table grows past this many clients.
CLEANUP_THRESHOLD = 1000


def enforce_rate_limit(request: Request) -> None:
    limiter: RateLimiter = request.app.state.rate_limiter
    if len(limiter) >= CLEANUP_THRESHOLD:
        limiter.cleanup()
    identifier = request.client.host if request.client else "anonymous"
    decision = limiter.check(identifier)
    if not decision.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests",
        )


def get_coordinator(request: Request) -> AutoAssignmentCoordinator:
    return request.app.state.assignment_coordinator


def get_notifier(request: Request) -> RiderNotifier:
    return request.app.state.rider_notifier
