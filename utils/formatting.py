"""Display formatting for prices and areas."""

import re
from typing import Any


def format_price(value: Any) -> str:
    """
    Format a loosely written per-pyeong price with thousands separators.

    Examples:
        "85000"  -> "85,000"
        "8.5만"   -> "8.5"
        ""       -> "-"
        "별도협의" -> "별도협의"  (non-numeric values pass through)
    """
    if value is None or value == "" or value == "-":
        return "-"

    numeric = re.sub(r"[^0-9.]", "", str(value))
    try:
        number = float(numeric)
    except ValueError:
        return str(value)

    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def format_area(value: Any) -> str:
    """Format an area with one decimal, ``-`` when zero or missing."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "-"
    if not number:
        return "-"
    return f"{number:.1f}"
