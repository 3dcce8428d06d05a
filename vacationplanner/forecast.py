"""Day-by-day balance forecasts for charting and export."""

from collections.abc import Iterator
from datetime import date

from vacationplanner.calculator import balance_on
from vacationplanner.dates import add_days, days_between
from vacationplanner.models import ForecastPoint, PlannerContext
from vacationplanner.payschedule import paydays_in_range

YEAR_HORIZON_DAYS = 365
SPLIT_AT_DAY = 182
CSV_HEADER = "date,hours"


def payday_offsets(context: PlannerContext, start: date, day_count: int) -> set[int]:
    """Offsets from start (0..day_count) that land on a payday."""
    config = context.config
    paydays = paydays_in_range(
        start,
        add_days(start, day_count),
        config.effective_first_payday,
        config.effective_pay_frequency_days,
    )
    offsets = (days_between(start, payday) for payday in paydays)
    return {offset for offset in offsets if 0 <= offset <= day_count}


def iter_forecast(context: PlannerContext, start: date, day_count: int) -> Iterator[ForecastPoint]:
    """
    Yield one point per calendar day in [start, start + day_count].

    Weekends and holidays are included; paydays are flagged. Each call
    recomputes from the current context.
    """
    paydays = payday_offsets(context, start, day_count)
    for offset in range(day_count + 1):
        day = add_days(start, offset)
        yield ForecastPoint(
            date=day, balance=balance_on(context, day), is_payday=offset in paydays
        )


def forecast_series(context: PlannerContext, start: date, day_count: int) -> list[ForecastPoint]:
    """Materialized forecast of ``day_count + 1`` points."""
    return list(iter_forecast(context, start, day_count))


def split_forecast(
    context: PlannerContext,
    start: date,
    horizon_days: int = YEAR_HORIZON_DAYS,
    split_at: int = SPLIT_AT_DAY,
) -> tuple[list[ForecastPoint], list[ForecastPoint]]:
    """
    Split a horizon into two consecutive windows for side-by-side display.

    The second window starts on the split day, so both charts share that point.
    """
    split_at = max(0, min(split_at, horizon_days))
    first = forecast_series(context, start, split_at)
    second = forecast_series(context, add_days(start, split_at), horizon_days - split_at)
    return first, second


def forecast_csv(series: list[ForecastPoint]) -> str:
    """Render a series as ``date,hours`` rows with two-decimal balances."""
    rows = [CSV_HEADER]
    rows.extend(f"{point.date.isoformat()},{point.balance:.2f}" for point in series)
    return "\n".join(rows)
