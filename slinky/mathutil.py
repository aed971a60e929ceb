"""Numeric helpers."""

from __future__ import annotations

import math
import re
from typing import Optional, TypeVar, Union

T = TypeVar("T")

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def clamp(val: T, a: T, b: T) -> T:
    """Return ``val`` limited to the range spanned by ``a`` and ``b``."""
    lower = min(a, b)
    upper = max(a, b)
    return min(max(val, lower), upper)


def _int_or_percent(value: Union[int, str, None]) -> tuple[int, bool]:
    if value is None:
        raise ValueError("nil value for IntOrString")
    if isinstance(value, bool):
        raise TypeError("invalid type: boolean is not an int or a percentage")
    if isinstance(value, int):
        return value, False
    if isinstance(value, str):
        if not value.endswith("%"):
            raise ValueError(f"invalid type: string is not a percentage: {value!r}")
        number = value[:-1]
        if not _DECIMAL.fullmatch(number):
            raise ValueError(f"invalid value for IntOrString: {value!r}")
        return int(number), True
    raise TypeError(f"invalid type {type(value).__name__}")


def get_scaled_value_from_int_or_percent(
    int_or_percent: Optional[Union[int, str]],
    total: int,
    round_up: bool,
    default_value: int,
) -> int:
    """Scale a count or a percentage such as ``"50%"`` against ``total``.

    Returns ``default_value`` when the input is missing or invalid.
    """
    try:
        value, is_percent = _int_or_percent(int_or_percent)
    except (TypeError, ValueError):
        return default_value
    if not is_percent:
        return value
    scaled = float(value) * float(total) / 100
    return int(math.ceil(scaled) if round_up else math.floor(scaled))