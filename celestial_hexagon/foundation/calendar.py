"""Calendar arithmetic for eclipse catalogs.

Dates use astronomical year numbering: year 0 is 1 BC, year -1 is 2 BC.
Day numbers are proleptic-Gregorian Julian Day Numbers, which keep
arithmetic continuous across the BC/AD boundary.
"""

from __future__ import annotations

import re
from typing import NamedTuple

_DATE_RE = re.compile(r"^(-?\d+)-(\d{1,2})-(\d{1,2})")
_TIME_RE = re.compile(r"(\d{2}:\d{2}:\d{2})")

DEFAULT_TIME = "00:00:00"


class ParsedDate(NamedTuple):
    year: int
    month: int
    day: int
    time: str


def date_to_jdn(year: int, month: int, day: int) -> int:
    """Convert a calendar date to its Julian Day Number.

    Floor division keeps the formula valid for zero and negative years.
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return (
        day
        + (153 * m + 2) // 5
        + 365 * y
        + y // 4
        - y // 100
        + y // 400
        - 32045
    )


def parse_eclipse_date(text: str) -> ParsedDate | None:
    """Parse catalog strings like ``"-3974-07-25 16:41:19"``.

    Returns None when no leading ``Y-M-D`` triple is present.  A missing
    time of day falls back to midnight.
    """
    trimmed = text.strip()
    match = _DATE_RE.match(trimmed)
    if not match:
        return None

    time_match = _TIME_RE.search(trimmed)
    return ParsedDate(
        year=int(match.group(1)),
        month=int(match.group(2)),
        day=int(match.group(3)),
        time=time_match.group(1) if time_match else DEFAULT_TIME,
    )


def format_year(year: int) -> str:
    """Astronomical year → ``"BC n"`` / ``"AD n"``."""
    if year < 1:
        return f"BC {abs(year - 1)}"
    return f"AD {year}"


def format_unified_date(year: int, month: int, day: int) -> str:
    """Zero-padded ``"BC 0001-01-10"`` style date."""
    prefix = "BC" if year < 1 else "AD"
    abs_year = abs(year - 1) if year < 1 else year
    return f"{prefix} {abs_year:04d}-{month:02d}-{day:02d}"


def format_full_date(year: int, month: int, day: int) -> str:
    """``"AD 2024-04-08"`` style date without padding the year."""
    return f"{format_year(year)}-{month:02d}-{day:02d}"
