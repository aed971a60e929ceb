"""Typed lookups of values stored in annotation maps."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone

from .timestore import ZERO_TIME

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?(?:(Z)|([+-])([0-9]{2}):([0-9]{2}))"
)


def _valid_first_digit(text: str) -> bool:
    """Reject empty values, a leading plus sign and leading zeros."""
    if not text:
        return False
    first = text[0]
    return first == "-" or text == "0" or "1" <= first <= "9"


def _parse_int32(text: str) -> int:
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid syntax {text!r}")
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"value out of range {text!r}")
    return value


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean {text!r}")


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 3339 time")
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()
    if zulu:
        tz = timezone.utc
    else:
        hours, minutes = int(off_h), int(off_m)
        if hours >= 24 or minutes >= 60:
            raise ValueError(f"time zone offset out of range in {text!r}")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(-offset if sign == "-" else offset)
    microsecond = int((fraction or "").ljust(6, "0")[:6])
    return datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second),
        microsecond, tzinfo=tz,
    )


def get_number_from_annotations(annotations: Mapping[str, str], key: str) -> int:
    """Return the 32-bit integer stored under ``key``, or 0 when it is absent.

    Raises ValueError for values with a plus sign, leading zeros or other
    invalid text.
    """
    if key not in annotations:
        return 0
    value = annotations[key]
    if not _valid_first_digit(value):
        raise ValueError(f"invalid value {value!r}")
    return _parse_int32(value)


def get_bool_from_annotations(annotations: Mapping[str, str], key: str) -> bool:
    """Return the boolean stored under ``key``, or False when it is absent."""
    if key not in annotations:
        return False
    return _parse_bool(annotations[key])


def get_time_from_annotations(annotations: Mapping[str, str], key: str) -> datetime:
    """Return the RFC 3339 time stored under ``key``, or ZERO_TIME when absent."""
    if key not in annotations:
        return ZERO_TIME
    return _parse_rfc3339(annotations[key])