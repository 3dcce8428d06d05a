"""Holiday calendars used to exclude days from leave-hour counting."""

from calendar import MONDAY, THURSDAY, monthrange
from collections.abc import Iterable
from datetime import date, timedelta
from functools import lru_cache
from typing import Protocol, runtime_checkable

import jpholiday

from vacationplanner.errors import UnknownHolidayCalendarError


@runtime_checkable
class HolidayPolicy(Protocol):
    """Anything that can tell whether a date is a holiday."""

    name: str

    def is_holiday(self, target_date: date) -> bool: ...

    def holidays_between(self, start: date, end: date) -> set[date]: ...

    def holiday_name(self, target_date: date) -> str | None: ...


class NoHolidays:
    """Weekends-only mode: no date is ever a holiday."""

    name = "none"

    def is_holiday(self, target_date: date) -> bool:
        return False

    def holidays_between(self, start: date, end: date) -> set[date]:
        return set()

    def holiday_name(self, target_date: date) -> str | None:
        return None


class FixedHolidays:
    """An explicit, precomputed set of holiday dates."""

    name = "fixed"

    def __init__(self, dates: Iterable[date] = ()) -> None:
        self._dates: frozenset[date] = frozenset(dates)

    def is_holiday(self, target_date: date) -> bool:
        return target_date in self._dates

    def holidays_between(self, start: date, end: date) -> set[date]:
        return {holiday for holiday in self._dates if start <= holiday <= end}

    def holiday_name(self, target_date: date) -> str | None:
        return "Holiday" if target_date in self._dates else None


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """Return the n-th given weekday (0 = Monday) of a month."""
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def last_weekday(year: int, month: int, weekday: int) -> date:
    """Return the last given weekday (0 = Monday) of a month."""
    _, days_in_month = monthrange(year, month)
    last = date(year, month, days_in_month)
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def observed(holiday: date) -> date:
    """
    Shift a fixed-date holiday to the day it is observed.

    Saturday holidays are observed the preceding Friday,
    Sunday holidays the following Monday.
    """
    # 5 = Saturday, 6 = Sunday
    if holiday.weekday() == 5:
        return holiday - timedelta(days=1)
    if holiday.weekday() == 6:
        return holiday + timedelta(days=1)
    return holiday


@lru_cache(maxsize=64)
def _federal_calendar(year: int) -> dict[date, str]:
    fixed = [
        (date(year, 1, 1), "New Year's Day"),
        (date(year, 7, 4), "Independence Day"),
        (date(year, 11, 11), "Veterans Day"),
        (date(year, 12, 25), "Christmas Day"),
    ]
    if year >= 2021:
        fixed.append((date(year, 6, 19), "Juneteenth"))

    floating = [
        (nth_weekday(year, 1, MONDAY, 3), "Martin Luther King Jr. Day"),
        (nth_weekday(year, 2, MONDAY, 3), "Presidents' Day"),
        (last_weekday(year, 5, MONDAY), "Memorial Day"),
        (nth_weekday(year, 9, MONDAY, 1), "Labor Day"),
        (nth_weekday(year, 10, MONDAY, 2), "Columbus Day"),
        (nth_weekday(year, 11, THURSDAY, 4), "Thanksgiving Day"),
    ]

    by_date = {observed(holiday): name for holiday, name in fixed}
    by_date.update(floating)
    return by_date


def federal_holidays(year: int) -> frozenset[date]:
    """
    Observed U.S. federal holidays produced by the rules of one calendar year.

    The result can contain Dec 31 of the previous year when New Year's Day
    falls on a Saturday.
    """
    return frozenset(_federal_calendar(year))


class FederalHolidays:
    """U.S. federal holidays with weekend observance shifting."""

    name = "us-federal"

    def is_holiday(self, target_date: date) -> bool:
        return self.holiday_name(target_date) is not None

    def holidays_between(self, start: date, end: date) -> set[date]:
        if end < start:
            return set()
        # Next year's rules can push New Year's Day back into December
        return {
            holiday
            for year in range(start.year, end.year + 2)
            for holiday in federal_holidays(year)
            if start <= holiday <= end
        }

    def holiday_name(self, target_date: date) -> str | None:
        for year in (target_date.year, target_date.year + 1):
            name = _federal_calendar(year).get(target_date)
            if name is not None:
                return name
        return None


class JapaneseHolidays:
    """Japanese public holidays."""

    name = "japan"

    def is_holiday(self, target_date: date) -> bool:
        return jpholiday.is_holiday(target_date)

    def holidays_between(self, start: date, end: date) -> set[date]:
        if end < start:
            return set()
        return {holiday for holiday, _ in jpholiday.between(start, end)}

    def holiday_name(self, target_date: date) -> str | None:
        return jpholiday.is_holiday_name(target_date)


HOLIDAY_CALENDARS: dict[str, type[NoHolidays | FederalHolidays | JapaneseHolidays]] = {
    NoHolidays.name: NoHolidays,
    FederalHolidays.name: FederalHolidays,
    JapaneseHolidays.name: JapaneseHolidays,
}


def get_holiday_policy(name: str | None) -> HolidayPolicy:
    """Look up a holiday calendar by its settings name."""
    if not name:
        return NoHolidays()
    try:
        return HOLIDAY_CALENDARS[name.strip().lower()]()
    except KeyError:
        msg = f"Unknown holiday calendar {name!r}, expected one of {sorted(HOLIDAY_CALENDARS)}"
        raise UnknownHolidayCalendarError(msg) from None
