"""Publish date parsing for report issues ("26.01" / "2026.01")."""

import re
from datetime import date
from typing import Optional

from models.constants import EPOCH_DATE

PUBLISH_DATE_PATTERN = re.compile(r"(\d{2,4})\.(\d{2})")


def parse_publish_date(publish_date: Optional[str]) -> date:
    """
    Parse a report publish date into the first day of its month.

    Two-digit years are read as 20YY. Anything that cannot be parsed maps to
    EPOCH_DATE so that it sorts after every real issue in newest-first order.

    Examples:
        "26.01"   -> date(2026, 1, 1)
        "2025.11" -> date(2025, 11, 1)
        "garbage" -> date(1970, 1, 1)
    """
    if not publish_date:
        return EPOCH_DATE

    match = PUBLISH_DATE_PATTERN.search(str(publish_date))
    if not match:
        return EPOCH_DATE

    year = int(match.group(1))
    month = int(match.group(2))
    if year < 100:
        year += 2000

    try:
        return date(year, month, 1)
    except ValueError:
        return EPOCH_DATE


def is_parseable(publish_date: Optional[str]) -> bool:
    """True if ``publish_date`` yields a real date rather than the epoch fallback."""
    return parse_publish_date(publish_date) != EPOCH_DATE


def format_year_month(value: date) -> str:
    """Render a date the way the UI labels issues, e.g. ``2026년 1월``."""
    return f"{value.year}년 {value.month}월"
