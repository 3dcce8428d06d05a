"""Forecast table widget showing one row per day."""

from datetime import date

from rich.text import Text
from textual.widgets import DataTable

from vacationplanner.dates import is_weekend
from vacationplanner.holidays import HolidayPolicy
from vacationplanner.models import ForecastPoint


class ForecastTable(DataTable):
    """Table displaying a forecast series with paydays highlighted."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self.series: list[ForecastPoint] = []

    def on_mount(self) -> None:
        """Set up the table columns."""
        # "YYYY-MM-DD (Day)" = 16 chars
        self.add_column("Date", width=16)
        self.add_column("Balance", width=10)
        self.add_column("Note")

    def load_series(
        self, series: list[ForecastPoint], holidays: HolidayPolicy, query_date: date
    ) -> None:
        """Load a forecast series into the table."""
        self.clear()
        self.series = series
        query_row_index = None

        for idx, point in enumerate(series):
            date_display = f"{point.date.isoformat()} {point.date.strftime('(%a)')}"
            balance_str = f"{point.balance:.2f}"

            notes = []
            if point.is_payday:
                notes.append("Payday")
            holiday_name = holidays.holiday_name(point.date)
            if holiday_name:
                notes.append(holiday_name)
            note = " | ".join(notes)

            if point.date == query_date:
                style = "bold yellow"
                query_row_index = idx
            elif point.is_payday:
                style = "bold cyan"
            elif holiday_name:
                style = "red"
            elif is_weekend(point.date):
                style = "dim"
            else:
                style = None

            balance_style = style or ("red" if point.balance < 0 else None)
            self.add_row(
                Text(date_display, style=style or ""),
                Text(balance_str, style=balance_style or ""),
                Text(note, style=style or ""),
                key=point.date.isoformat(),
            )

        if query_row_index is not None and len(self.rows) > 0:
            self.move_cursor(row=query_row_index)

    def selected_date(self) -> date | None:
        """Date of the row under the cursor."""
        if not self.series or self.cursor_row is None:
            return None
        if not 0 <= self.cursor_row < len(self.series):
            return None
        return self.series[self.cursor_row].date
