"""A thread-safe store of points in time keyed by string."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timezone

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

KeepFunc = Callable[[datetime, datetime], bool]


def greater(old: datetime, new: datetime) -> bool:
    """Keep the new time when it is later."""
    return new > old


def less(old: datetime, new: datetime) -> bool:
    """Keep the new time when it is earlier."""
    return new < old


class TimeStore:
    """Stores one time per key; ``keep`` decides between repeated pushes."""

    def __init__(self, keep: KeepFunc = greater) -> None:
        self._keep = keep
        self._values: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def push(self, key: str, when: datetime) -> None:
        """Store ``when``, or keep the current time if ``keep`` says so."""
        with self._lock:
            if key not in self._values or self._keep(self._values[key], when):
                self._values[key] = when

    def pop(self, key: str) -> datetime:
        """Remove and return the time for ``key``, or ZERO_TIME when absent."""
        with self._lock:
            return self._values.pop(key, ZERO_TIME)

    def peek(self, key: str) -> datetime:
        """Return the time for ``key`` without removing it, or ZERO_TIME."""
        with self._lock:
            return self._values.get(key, ZERO_TIME)