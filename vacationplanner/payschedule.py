"""Pay schedule: paydays every N days starting from a first payday."""

from datetime import date

from vacationplanner.dates import add_days, days_between

DEFAULT_PAY_FREQUENCY_DAYS = 14


def count_paydays_up_to(first_payday: date, target_date: date, period_days: int) -> int:
    """
    Count paydays in [first_payday, target_date].

    The first payday itself counts as period 1 once reached.
    """
    if target_date < first_payday:
        return 0
    return days_between(first_payday, target_date) // period_days + 1


def next_payday_on_or_after(target_date: date, first_payday: date, period_days: int) -> date:
    """Return the earliest payday that is not before target_date."""
    if target_date <= first_payday:
        return first_payday
    # Ceiling division without floats
    steps = -(-days_between(first_payday, target_date) // period_days)
    return add_days(first_payday, steps * period_days)


def paydays_in_range(start: date, end: date, first_payday: date, period_days: int) -> list[date]:
    """All paydays in [start, end] in increasing order; empty when none fall in range."""
    paydays = []
    payday = next_payday_on_or_after(start, first_payday, period_days)
    while payday <= end:
        paydays.append(payday)
        payday = add_days(payday, period_days)
    return paydays
