"""
Display formatting for report values.
"""

import math
from typing import Optional
from datetime import date

INVALID_DATE = "Invalid Date"


def format_currency(amount: float) -> str:
    """Whole-dollar US currency: 1438.92 -> "$1,439", -2000 -> "-$2,000"."""
    if not math.isfinite(amount):
        return "N/A"
    rounded = math.floor(abs(amount) + 0.5)
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}${rounded:,}"


def format_percent(value: float, decimals: int = 2) -> str:
    if not math.isfinite(value):
        return "N/A"
    return f"{value:.{decimals}f}%"


def format_rate(value: float) -> str:
    """Render a rate the way it was entered: 6 -> "6", 6.5 -> "6.5"."""
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return str(int(value))
    return repr(float(value))


def format_date(value: Optional[date]) -> str:
    """US-style date (10/19/2026); invalid dates render as such."""
    if value is None:
        return INVALID_DATE
    return f"{value.month}/{value.day}/{value.year}"
