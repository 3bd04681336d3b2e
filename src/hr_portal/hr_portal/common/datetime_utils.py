from __future__ import annotations

import re
from datetime import date, datetime, timezone

from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str):
        raise ValidationError("Date must be YYYY-MM-DD")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD")


def to_midnight(day: date) -> datetime:
    """Calendar day as a naive datetime at 00:00 (how days are stored)."""
    return datetime(day.year, day.month, day.day)


def is_hhmm(value: str) -> bool:
    return isinstance(value, str) and _HHMM.match(value) is not None


def hhmm_to_minutes(value: str) -> int:
    """Convert a zero-padded 24-hour ``HH:MM`` string to minutes since midnight."""
    m = _HHMM.match(value) if isinstance(value, str) else None
    if not m:
        raise ValidationError(f"Invalid time {value!r} (expected HH:MM)")
    return int(m.group(1)) * 60 + int(m.group(2))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in MongoDB."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
