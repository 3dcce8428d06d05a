"""Read-only queries over the leave and credit records."""

from datetime import date

from vacationplanner.models import PlannerContext


def latest_leave_date(context: PlannerContext) -> date | None:
    """Last day covered by any leave record, or None for an empty ledger."""
    if not context.ledger.leave:
        return None
    return max(record.end for record in context.ledger.leave)


def total_future_leave_hours(context: PlannerContext, from_date: date) -> float:
    """
    Leave hours charged on or after from_date.

    Ranges that started earlier are clipped at from_date rather than skipped.
    """
    return sum(
        (
            record.hours_between(from_date, date.max, context.holidays)
            for record in context.ledger.leave
        ),
        0.0,
    )


def leave_hours_up_to(context: PlannerContext, target_date: date) -> float:
    """Leave hours charged on or before target_date; in-progress ranges are capped there."""
    return sum(
        (
            record.hours_between(date.min, target_date, context.holidays)
            for record in context.ledger.leave
        ),
        0.0,
    )


def credit_hours_up_to(context: PlannerContext, target_date: date) -> float:
    """Credited hours effective on or before target_date."""
    return sum(
        (credit.credited_hours for credit in context.ledger.credits if credit.date <= target_date),
        0.0,
    )
