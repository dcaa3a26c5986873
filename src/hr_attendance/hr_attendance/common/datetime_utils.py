from __future__ import annotations

import calendar
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.exceptions import InvalidDateError, ValidationError

_TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M:%S %p", "%I:%M%p")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_time_of_day(value: Optional[str]) -> Optional[time]:
    """Parse a settings time-of-day such as '11:00', '11:00:00' or '7:30 PM'.

    Empty values mean "not configured" and return None.
    """
    v = (value or "").strip()
    if not v:
        return None
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(v.upper(), fmt).time()
        except ValueError:
            continue
    raise InvalidDateError(f"Invalid time of day: {value!r}")


def require_year_month(year: int, month: int) -> tuple[int, int]:
    try:
        y, m = int(year), int(month)
    except (TypeError, ValueError):
        raise InvalidDateError(f"Invalid year/month: {year!r}-{month!r}")
    if not 1 <= m <= 12 or not 1 <= y <= 9999:
        raise InvalidDateError(f"Invalid year/month: {year!r}-{month!r}")
    return y, m


def month_bounds(year: int, month: int) -> tuple[date, date]:
    y, m = require_year_month(year, month)
    return date(y, m, 1), date(y, m, calendar.monthrange(y, m)[1])


def dates_in_month(year: int, month: int) -> list[date]:
    start, end = month_bounds(year, month)
    return [date(start.year, start.month, d) for d in range(1, end.day + 1)]


def sunday_based_weekday(day: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday (Python's weekday() has Monday=0)."""
    return (day.weekday() + 1) % 7


def compute_total_hours(clock_in: Optional[datetime], clock_out: Optional[datetime]) -> Optional[Decimal]:
    """Worked hours between clock-in and clock-out, rounded to one decimal."""
    if clock_in is None or clock_out is None:
        return None
    if clock_out < clock_in:
        raise ValidationError("Clock-out cannot be earlier than clock-in")
    hours = Decimal((clock_out - clock_in).total_seconds()) / Decimal(3600)
    return hours.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so callers that do not inject an instant still go through one place.
    """
    return datetime.now()
