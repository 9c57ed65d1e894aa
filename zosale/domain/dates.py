"""
Tolerant date parsing shared by every filtering call site.

Expiry dates are stored as free text in a locale-ambiguous format, so
parsing happens in two stages:

1. A generic parse (python-dateutil). The configured ``dayfirst``
   locale preference applies to day/month forms only; year-first
   strings such as ISO-8601 always read year-month-day. Missing parts
   fall back to ``PARSE_DEFAULT`` so results never depend on today.
2. An explicit ``DD/MM/YYYY`` split on ``/``, the canonical format of
   seeded and generated records.

Record dates that fail both stages parse to ``None`` and are never
excluded by a range filter. Caller-supplied bounds only get the
generic stage and raise when malformed.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from dateutil import parser as dateutil_parser

# Missing date parts resolve against this, never against today.
PARSE_DEFAULT = datetime(1, 1, 1)

_YEAR_FIRST = re.compile(r"^\d{4}(?:\D|$)")


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def parse_generic(text: str, dayfirst: bool = False) -> datetime:
    """
    Parse a date string with the generic parser.

    Raises:
        ValueError: If the text is empty or not a recognisable date.
    """
    if not text or not text.strip():
        raise ValueError("Date string is empty")

    text = text.strip()
    if _YEAR_FIRST.match(text):
        # ISO-8601 and other year-first forms ignore the locale preference
        dayfirst = False

    try:
        parsed = dateutil_parser.parse(text, dayfirst=dayfirst, default=PARSE_DEFAULT)
    except (dateutil_parser.ParserError, OverflowError) as e:
        raise ValueError(f"Unrecognised date: {text!r}") from e

    return _to_naive_utc(parsed)


def parse_day_month_year(text: str) -> datetime | None:
    """Parse ``DD/MM/YYYY`` by splitting on ``/``. Returns None on failure."""
    parts = text.split("/")
    if len(parts) != 3:
        return None

    try:
        day, month, year = (int(part) for part in parts)
        return datetime(year, month, day)
    except ValueError:
        return None


def parse_expiry(text: str | None, dayfirst: bool = False) -> datetime | None:
    """
    Parse a record's expiry date.

    Never raises: returns None when neither stage understands the text.
    """
    if text is None:
        return None

    try:
        return parse_generic(text, dayfirst=dayfirst)
    except ValueError:
        pass

    return parse_day_month_year(text)


def parse_bound(text: str | None, dayfirst: bool = False) -> datetime | None:
    """
    Parse a caller-supplied range bound.

    Returns None for an absent or blank bound.

    Raises:
        ValueError: If the bound is present but malformed.
    """
    if text is None or not text.strip():
        return None
    return parse_generic(text, dayfirst=dayfirst)
