"""Point-in-time leave balance."""

from datetime import date, datetime

from vacationplanner.dates import normalize
from vacationplanner.errors import InvalidDateError
from vacationplanner.ledger import (
    credit_hours_up_to,
    latest_leave_date,
    leave_hours_up_to,
    total_future_leave_hours,
)
from vacationplanner.models import PlannerContext, PlannerSummary
from vacationplanner.payschedule import count_paydays_up_to, next_payday_on_or_after


def require_date(value: date | datetime | str | None) -> date:
    """Normalize a date, raising InvalidDateError when it is missing or unparseable."""
    target_date = normalize(value)
    if target_date is None:
        msg = f"Invalid date: {value!r} (expected YYYY-MM-DD)"
        raise InvalidDateError(msg)
    return target_date


def accrued_hours_up_to(context: PlannerContext, target_date: date) -> float:
    """Hours accrued on paydays up to and including target_date."""
    config = context.config
    periods = count_paydays_up_to(
        config.effective_first_payday, target_date, config.effective_pay_frequency_days
    )
    return periods * config.effective_accrual_per_period


def balance_on(context: PlannerContext, target: date | datetime | str | None) -> float:
    """
    Calculate the leave balance in hours at the end of a day.

    balance = start balance
              + accrual per period * paydays reached
              - 8h per business day of leave up to the date
              + credits effective up to the date

    The result is not rounded.
    """
    target_date = require_date(target)

    balance = context.config.effective_start_balance
    balance += accrued_hours_up_to(context, target_date)
    balance -= leave_hours_up_to(context, target_date)
    balance += credit_hours_up_to(context, target_date)
    return balance


def summarize(
    context: PlannerContext, today: date, query: date | datetime | str | None = None
) -> PlannerSummary:
    """Collect the headline figures shown next to the forecast."""
    query_date = require_date(query) if query is not None else today
    config = context.config
    latest_leave = latest_leave_date(context)
    return PlannerSummary(
        today=today,
        query_date=query_date,
        balance_today=balance_on(context, today),
        balance_on_query=balance_on(context, query_date),
        next_payday=next_payday_on_or_after(
            today, config.effective_first_payday, config.effective_pay_frequency_days
        ),
        latest_leave=latest_leave,
        # With nothing planned this is the balance today
        balance_after_latest_leave=balance_on(context, latest_leave or today),
        future_leave_hours=total_future_leave_hours(context, today),
    )
