"""Normalization helpers.

Centralizes defensive parsing of the raw strings a case record carries.
Nothing in here raises for bad input: unparsable values come back as
``None`` (or ``0`` for interruption boundaries).
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, time
from typing import Any

from pyohca._constants import MMSS_LENGTH, NOT_APPLICABLE

_EPOCH_DATE = date(1970, 1, 1)

# HH:MM or HH:MM:SS with optional fraction.
_TIME_OF_DAY = re.compile(r"^\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?$")


def safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def is_not_applicable(value: Any) -> bool:
    return safe_str(value) == NOT_APPLICABLE


def parse_instant(value: Any, *, anchor_date: date | None = None) -> datetime | None:
    """Parse a raw timestamp into a naive :class:`datetime`.

    Accepts ISO date-times (``T`` or space separated) and bare
    time-of-day strings, which are placed on *anchor_date*
    (1970-01-01 when omitted).  Values carrying a zone (``Z`` or
    ``+08:00``) are converted to UTC; naive values are taken as they are.
    Returns ``None`` for empty, ``N/A`` and unparsable values.
    """
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    text = safe_str(value)
    if not text or text == NOT_APPLICABLE:
        return None

    if _TIME_OF_DAY.match(text):
        try:
            parsed_time = time.fromisoformat(text if text.count(":") == 2 else f"{text}:00")
        except ValueError:
            return None
        return datetime.combine(anchor_date or _EPOCH_DATE, parsed_time)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _to_naive_utc(parsed)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def parse_date(value: Any) -> date | None:
    text = safe_str(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def parse_mmss(value: Any) -> int:
    """Convert a 4-digit ``MMSS`` code to seconds.

    Anything other than exactly four digits counts as ``0``.
    """
    text = safe_str(value)
    if len(text) != MMSS_LENGTH or not text.isascii() or not text.isdigit():
        return 0
    return int(text[:2]) * 60 + int(text[2:])


def is_mmss(value: Any) -> bool:
    text = safe_str(value)
    return len(text) == MMSS_LENGTH and text.isascii() and text.isdigit()
