"""Calendar-date arithmetic and business-day counting."""

import logging
import re
from datetime import date, datetime, timedelta

from vacationplanner.holidays import HolidayPolicy

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 8

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def normalize(value: date | datetime | str | None) -> date | None:
    """
    Reduce a date, datetime or ISO ``YYYY-MM-DD`` string to a plain calendar date.

    Returns None for empty or unparseable input instead of raising, so callers
    can decide whether a missing date is an error.
    """
    if value is None:
        return None
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # Only the full YYYY-MM-DD form; no week dates, basic form or time suffix
        if ISO_DATE_PATTERN.fullmatch(text):
            try:
                return date.fromisoformat(text)
            except ValueError:
                pass
        logger.debug("Unparseable date %r", value)
    return None


def add_days(target_date: date, days: int) -> date:
    """Shift a date by a (possibly negative) number of days."""
    return target_date + timedelta(days=days)


def days_between(start: date, end: date) -> int:
    """Signed number of days from start to end."""
    return (end - start).days


def is_weekend(target_date: date) -> bool:
    """Check if a date is a Saturday or Sunday."""
    # 5 = Saturday, 6 = Sunday
    return target_date.weekday() in (5, 6)


def is_business_day(target_date: date, holidays: HolidayPolicy | None = None) -> bool:
    """
    Check if a date is a business day.

    A business day is:
    - Not a weekend (Saturday/Sunday)
    - Not a holiday under the given policy (weekends only when no policy is given)
    """
    if is_weekend(target_date):
        return False
    return holidays is None or not holidays.is_holiday(target_date)


def count_weekdays_inclusive(start: date, end: date) -> int:
    """Count Monday-to-Friday dates in [start, end]; 0 when end is before start."""
    if end < start:
        return 0
    total_days = days_between(start, end) + 1
    full_weeks, remainder = divmod(total_days, 7)
    weekdays = full_weeks * 5
    first_weekday = start.weekday()
    weekdays += sum(1 for offset in range(remainder) if (first_weekday + offset) % 7 < 5)
    return weekdays


def count_business_days_inclusive(
    start: date, end: date, holidays: HolidayPolicy | None = None
) -> int:
    """
    Count business days in [start, end].

    Weekdays are counted in closed form, then holidays that fall on a weekday
    inside the range are subtracted. An inverted range counts as empty.
    """
    if end < start:
        return 0
    weekdays = count_weekdays_inclusive(start, end)
    if holidays is None:
        return weekdays
    weekday_holidays = [
        holiday for holiday in holidays.holidays_between(start, end) if not is_weekend(holiday)
    ]
    return weekdays - len(weekday_holidays)


def business_hours_inclusive(
    start: date, end: date, holidays: HolidayPolicy | None = None
) -> float:
    """Leave hours charged for a closed date range (8 hours per business day)."""
    return float(count_business_days_inclusive(start, end, holidays) * HOURS_PER_DAY)
