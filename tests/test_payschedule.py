"""Tests for the pay schedule."""

from datetime import date

from vacationplanner.dates import add_days, days_between
from vacationplanner.payschedule import (
    count_paydays_up_to,
    next_payday_on_or_after,
    paydays_in_range,
)

FIRST_PAYDAY = date(2026, 1, 8)


def test_count_paydays_before_first_payday():
    """No payday is counted before the first one."""
    assert count_paydays_up_to(FIRST_PAYDAY, date(2026, 1, 7), 14) == 0
    assert count_paydays_up_to(FIRST_PAYDAY, date(2025, 6, 1), 14) == 0


def test_count_paydays_first_payday_counts():
    """The first payday counts as period 1 once reached."""
    assert count_paydays_up_to(FIRST_PAYDAY, FIRST_PAYDAY, 14) == 1
    assert count_paydays_up_to(FIRST_PAYDAY, date(2026, 1, 21), 14) == 1


def test_count_paydays_two_periods():
    """Jan 22 is the second biweekly payday."""
    assert count_paydays_up_to(FIRST_PAYDAY, date(2026, 1, 22), 14) == 2


def test_count_paydays_over_a_year():
    """A year of biweekly paydays."""
    assert count_paydays_up_to(FIRST_PAYDAY, date(2026, 12, 31), 14) == 26
    assert count_paydays_up_to(FIRST_PAYDAY, date(2026, 12, 31), 7) == 52


def test_next_payday_on_or_after():
    """Next payday snaps forward to the schedule."""
    assert next_payday_on_or_after(date(2026, 1, 1), FIRST_PAYDAY, 14) == FIRST_PAYDAY
    assert next_payday_on_or_after(FIRST_PAYDAY, FIRST_PAYDAY, 14) == FIRST_PAYDAY
    assert next_payday_on_or_after(date(2026, 1, 9), FIRST_PAYDAY, 14) == date(2026, 1, 22)
    assert next_payday_on_or_after(date(2026, 1, 22), FIRST_PAYDAY, 14) == date(2026, 1, 22)


def test_next_payday_is_on_schedule():
    """The result is never before the date and always on the schedule."""
    for period in (1, 7, 14, 15, 30):
        for offset in range(-20, 120):
            target = add_days(FIRST_PAYDAY, offset)
            payday = next_payday_on_or_after(target, FIRST_PAYDAY, period)
            assert payday >= target
            assert payday >= FIRST_PAYDAY
            assert days_between(FIRST_PAYDAY, payday) % period == 0
            assert days_between(target, payday) < period or target < FIRST_PAYDAY


def test_paydays_in_range_january():
    """January 2026 has two biweekly paydays."""
    assert paydays_in_range(date(2026, 1, 1), date(2026, 1, 31), FIRST_PAYDAY, 14) == [
        date(2026, 1, 8),
        date(2026, 1, 22),
    ]


def test_paydays_in_range_inclusive_bounds():
    """Paydays on either bound are included."""
    assert paydays_in_range(date(2026, 1, 8), date(2026, 1, 22), FIRST_PAYDAY, 14) == [
        date(2026, 1, 8),
        date(2026, 1, 22),
    ]


def test_paydays_in_range_empty():
    """Ranges without paydays, or inverted ranges, are empty."""
    assert paydays_in_range(date(2026, 1, 9), date(2026, 1, 21), FIRST_PAYDAY, 14) == []
    assert paydays_in_range(date(2026, 1, 31), date(2026, 1, 1), FIRST_PAYDAY, 14) == []


def test_paydays_in_range_is_restartable():
    """Each call recomputes the sequence from scratch."""
    first = paydays_in_range(date(2026, 1, 1), date(2026, 6, 30), FIRST_PAYDAY, 14)
    second = paydays_in_range(date(2026, 1, 1), date(2026, 6, 30), FIRST_PAYDAY, 14)
    assert first == second
    assert all(b > a for a, b in zip(first, first[1:]))
