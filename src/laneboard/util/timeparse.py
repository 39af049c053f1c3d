# src/laneboard/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re

_RELATIVE_RE = re.compile(r"^\+\s*(\d+)\s*([mhdw])$", re.IGNORECASE)
_UNIT_SECONDS = {"m": 60, "h": 3600, "d": 86400, "w": 7 * 86400}
_NO_DUE = {"", "none", "-", "no"}


def parse_due(text: str | None, now: float) -> float | None:
    """Parse a due date typed by the user into epoch seconds.

    Accepts:
      - "" / "none" / "-"        -> no deadline
      - "+30m", "+2h", "+1d", "+1w" relative to `now`
      - "tomorrow"               -> now + 1 day
      - ISO date or datetime ("2026-10-20", "2026-10-20 14:30"), local time
    """
    s = (text or "").strip()
    if s.lower() in _NO_DUE:
        return None
    if s.lower() == "tomorrow":
        return now + _UNIT_SECONDS["d"]

    m = _RELATIVE_RE.match(s)
    if m:
        return now + int(m.group(1)) * _UNIT_SECONDS[m.group(2).lower()]

    try:
        parsed = dt.datetime.fromisoformat(s)
    except ValueError:
        raise ValueError(f"Invalid due date: {s!r}") from None
    return parsed.timestamp()


def format_due(ts: float | None) -> str:
    if ts is None:
        return ""
    return dt.datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M")


def format_short(ts: float | None) -> str:
    """Card label, e.g. "Oct 20"."""
    if ts is None:
        return ""
    return dt.datetime.fromtimestamp(ts).strftime("%b %d")
