"""A thread-safe store of durations keyed by string."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import timedelta

ZERO = timedelta(0)

KeepFunc = Callable[[timedelta, timedelta], bool]


def greater(old: timedelta, new: timedelta) -> bool:
    """Keep the new duration when it is larger."""
    return new > old


def less(old: timedelta, new: timedelta) -> bool:
    """Keep the new duration when it is smaller."""
    return new < old


class DurationStore:
    """Stores one duration per key; ``keep`` decides between repeated pushes."""

    def __init__(self, keep: KeepFunc = greater) -> None:
        self._keep = keep
        self._values: dict[str, timedelta] = {}
        self._lock = threading.Lock()

    def push(self, key: str, duration: timedelta) -> None:
        """Store ``duration``, or keep the current one if ``keep`` says so."""
        with self._lock:
            if key not in self._values or self._keep(self._values[key], duration):
                self._values[key] = duration

    def pop(self, key: str) -> timedelta:
        """Remove and return the duration for ``key``, or zero when absent."""
        with self._lock:
            return self._values.pop(key, ZERO)

    def peek(self, key: str) -> timedelta:
        """Return the duration for ``key`` without removing it, or zero."""
        with self._lock:
            return self._values.get(key, ZERO)