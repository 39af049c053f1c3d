# tests/test_timeparse.py

from __future__ import annotations

import datetime as dt

import pytest

from laneboard.util.timeparse import format_due, parse_due

from .fakes import DAY, HOUR, NOW


@pytest.mark.parametrize("raw", ["", "none", "NONE", "-", None])
def test_no_deadline(raw) -> None:
    assert parse_due(raw, NOW) is None


@pytest.mark.parametrize(
    ("raw", "offset"),
    [("+30m", 1800.0), ("+2h", 2 * HOUR), ("+1d", DAY), ("+1w", 7 * DAY), ("tomorrow", DAY)],
)
def test_relative(raw, offset) -> None:
    assert parse_due(raw, NOW) == NOW + offset


def test_iso_local_time() -> None:
    expected = dt.datetime(2026, 10, 20, 14, 30).timestamp()
    assert parse_due("2026-10-20 14:30", NOW) == expected
    assert parse_due("2026-10-20T14:30", NOW) == expected
    assert format_due(expected) == "2026-10-20 14:30"


def test_invalid() -> None:
    with pytest.raises(ValueError):
        parse_due("next tuesday-ish", NOW)
