"""Display formatting for times, dates and values."""

import math
from datetime import date, datetime
from typing import Optional


def round_half_up(value: Optional[float]) -> Optional[int]:
    """Round like a display would: halves go up, also for negatives (-2.5 -> -2)."""
    if value is None:
        return None
    return math.floor(value + 0.5)


def format_hour(timestamp: datetime) -> str:
    """12-hour time, e.g. ``01:00 PM``."""
    return timestamp.strftime("%I:%M %p")


def format_day(day: date) -> str:
    """Short day label, e.g. ``Mon, May 6``."""
    return f"{day:%a}, {day:%b} {day.day}"


def format_clock(now: datetime) -> str:
    """Wall-clock time with seconds, e.g. ``01:02:03 PM``."""
    return now.strftime("%I:%M:%S %p")


def format_amount(value: Optional[float]) -> str:
    """Millimetre amounts, with missing or zero values shown as ``0``."""
    if not value:
        return "0"
    return f"{value:g}"
