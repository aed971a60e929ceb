from datetime import datetime, timedelta, timezone

import pytest

from slinky.timestore import ZERO_TIME, TimeStore, greater, less

NOW = datetime.now(timezone.utc)
SECOND = timedelta(seconds=1)
MINUTE = timedelta(minutes=1)
HOUR = timedelta(hours=1)


@pytest.mark.parametrize(
    "key, when",
    [("foo", NOW), ("foo", NOW - MINUTE), ("bar", NOW - HOUR), ("bar", NOW + MINUTE)],
)
def test_push_then_pop(key, when):
    ts = TimeStore(greater)
    ts.push(key, when)
    assert ts.pop(key) == when


def test_peek_sequence():
    ts = TimeStore(greater)
    steps = [
        ("foo", NOW + SECOND, NOW + SECOND),
        ("foo", NOW - MINUTE, NOW + SECOND),
        ("foo", NOW + MINUTE, NOW + MINUTE),
        ("bar", NOW - HOUR, NOW - HOUR),
        ("bar", NOW - MINUTE, NOW - MINUTE),
        ("bar", NOW - SECOND, NOW - SECOND),
    ]
    for key, pushed, expected in steps:
        ts.push(key, pushed)
        assert ts.peek(key) == expected


def test_pop_sequence():
    ts = TimeStore(greater)
    ts.push("bar", NOW + MINUTE)
    ts.push("baz", NOW - HOUR)
    assert ts.pop("foo") == ZERO_TIME
    assert ts.pop("foo") == ZERO_TIME
    assert ts.pop("bar") == NOW + MINUTE
    assert ts.pop("bar") == ZERO_TIME
    assert ts.pop("baz") == NOW - HOUR
    assert ts.pop("baz") == ZERO_TIME


@pytest.mark.parametrize(
    "keep, first, second, expected",
    [
        (greater, ZERO_TIME, NOW + SECOND, NOW + SECOND),
        (greater, NOW + SECOND, ZERO_TIME, NOW + SECOND),
        (less, ZERO_TIME, NOW + SECOND, ZERO_TIME),
        (less, NOW + SECOND, ZERO_TIME, ZERO_TIME),
    ],
)
def test_update_policy(keep, first, second, expected):
    ts = TimeStore(keep)
    ts.push("k", first)
    ts.push("k", second)
    assert ts.peek("k") == expected


def test_pop_missing_key_is_year_one_utc():
    assert TimeStore().pop("missing") == datetime(1, 1, 1, tzinfo=timezone.utc)


def test_peek_missing_key():
    assert TimeStore().peek("missing") == ZERO_TIME