"""Millisecond clocks used for token expiry bookkeeping."""
from __future__ import annotations

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    @abstractmethod
    def now_millis(self) -> int:
        """Return the current time in milliseconds since the Unix epoch."""


class SystemClock(Clock):
    def now_millis(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start_millis: int = 0) -> None:
        self._now = start_millis

    def now_millis(self) -> int:
        return self._now

    def advance(self, millis: int = 0, *, seconds: float = 0) -> None:
        self._now += millis + int(seconds * 1000)

    def set(self, millis: int) -> None:
        self._now = millis


def now_millis() -> int:
    return SystemClock().now_millis()


def is_expired(expiration_millis: int | None, now: int) -> bool:
    """Return True when no expiry is known or ``now`` has reached it."""

    if expiration_millis is None:
        return True
    return now >= expiration_millis


__all__ = ["Clock", "SystemClock", "FixedClock", "now_millis", "is_expired"]
