"""Fixed-window request counter kept in process memory.

Counts reset on restart and are not shared between processes.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass(slots=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_at: float


@dataclass(slots=True)
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def check(self, identifier: str) -> RateLimitDecision:
        now = self._clock()
        window = self._windows.get(identifier)

        if window is None or now > window.reset_at:
            window = _Window(count=1, reset_at=now + self.window_seconds)
            self._windows[identifier] = window
            return RateLimitDecision(True, self.max_requests - 1, window.reset_at)

        if window.count >= self.max_requests:
            return RateLimitDecision(False, 0, window.reset_at)

        window.count += 1
        return RateLimitDecision(True, self.max_requests - window.count, window.reset_at)

    def cleanup(self) -> int:
        """Drop expired windows; returns how many were removed."""
        now = self._clock()
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)
