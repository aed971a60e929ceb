"""Helpers for lists of optional items."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional, TypeVar

T = TypeVar("T")


def reference_list(items: Iterable[T]) -> list[T]:
    """Return a new list holding references to the given items."""
    return list(items)


def dereference_list(items: Iterable[Optional[T]]) -> list[T]:
    """Return the items that are set, dropping every ``None``."""
    return [item for item in items if item is not None]