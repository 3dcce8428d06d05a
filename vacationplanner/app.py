"""Main Textual application."""

import logging
from datetime import date
from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Footer, Header

from vacationplanner.calculator import summarize
from vacationplanner.config import Config
from vacationplanner.dates import add_days
from vacationplanner.forecast import (
    YEAR_HORIZON_DAYS,
    forecast_csv,
    forecast_series,
    split_forecast,
)
from vacationplanner.models import (
    CreditEntry,
    LeaveRecord,
    PlannerConfig,
    PlannerContext,
    PlannerState,
)
from vacationplanner.store import StateStore
from vacationplanner.widgets import ForecastTable, LeaveDialog, SettingsDialog, SummaryPanel

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "vacation_forecast.csv"


class VacationPlannerApp(App):
    """Vacation balance planner TUI application."""

    CSS = """
    #main-container {
        height: 100%;
    }

    Vertical {
        height: 100%;
    }

    #summary-panel {
        height: 1fr;
        padding: 1;
        background: $panel;
        border: solid $primary;
    }

    #summary-row {
        height: 100%;
        width: 100%;
    }

    .stat-box {
        width: 1fr;
        padding: 0 1;
    }

    #tables {
        height: 4fr;
    }

    ForecastTable {
        width: 1fr;
        border: solid $primary;
    }

    #forecast-second {
        display: none;
    }

    #forecast-second.visible {
        display: block;
    }
    """

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("q", "quit", "Quit"),
        ("r", "reload", "Reload"),
        ("a", "add", "Add Leave/Credit"),
        ("c", "settings", "Settings"),
        ("t", "today", "Today"),
        ("n", "next_period", "Next Period"),
        ("b", "prev_period", "Prev Period"),
        ("s", "toggle_split", "Year/Split"),
        ("e", "export", "Export CSV"),
        ("?", "help", "Help"),
    ]

    def __init__(self, config: Config) -> None:
        super().__init__()
        self.config = config
        self.today = date.today()
        self.query_date = self.today
        self.split_mode = False
        self.holidays = config.holiday_policy()
        self.store = StateStore(config.db_path)
        self.planner_state = PlannerState()

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header(show_clock=True)
        with Container(id="main-container"), Vertical():
            yield SummaryPanel(id="summary-panel")
            with Horizontal(id="tables"):
                yield ForecastTable(id="forecast-first")
                yield ForecastTable(id="forecast-second")
        yield Footer()

    def on_mount(self) -> None:
        """Load data when the app starts."""
        self.title = "Vacation Planner"
        self.call_after_refresh(self.action_reload)

    @property
    def planner_context(self) -> PlannerContext:
        return PlannerContext.from_state(self.planner_state, self.holidays)

    def refresh_view(self) -> None:
        """Recompute the summary and forecast from the current state."""
        context = self.planner_context
        if self.split_mode:
            first, second = split_forecast(context, self.today)
            horizon = "two half-years"
        else:
            first = forecast_series(context, self.today, YEAR_HORIZON_DAYS)
            second = []
            horizon = f"{YEAR_HORIZON_DAYS} days"

        summary_panel = self.query_one("#summary-panel", SummaryPanel)
        summary_panel.update_summary(summarize(context, self.today, self.query_date), horizon)

        first_table = self.query_one("#forecast-first", ForecastTable)
        first_table.load_series(first, self.holidays, self.query_date)

        second_table = self.query_one("#forecast-second", ForecastTable)
        second_table.load_series(second, self.holidays, self.query_date)
        second_table.set_class(self.split_mode, "visible")

        self.sub_title = f"Query date {self.query_date.isoformat()}"
        first_table.focus()

    def save_and_refresh(self) -> None:
        """Persist the state, then redraw everything computed from it."""
        self.store.save(self.planner_state, self.holidays)
        self.refresh_view()

    def action_reload(self) -> None:
        """Reload the state from the store."""
        self.planner_state = self.store.load()
        self.refresh_view()

    def action_today(self) -> None:
        """Move the query date back to today."""
        self.query_date = self.today
        self.refresh_view()

    def action_next_period(self) -> None:
        """Move the query date forward by one pay period."""
        self.query_date = add_days(
            self.query_date, self.planner_state.config.effective_pay_frequency_days
        )
        self.refresh_view()

    def action_prev_period(self) -> None:
        """Move the query date back by one pay period."""
        self.query_date = add_days(
            self.query_date, -self.planner_state.config.effective_pay_frequency_days
        )
        self.refresh_view()

    def action_toggle_split(self) -> None:
        """Switch between one year-long table and two half-year tables."""
        self.split_mode = not self.split_mode
        self.refresh_view()

    def action_export(self) -> None:
        """Write the forecast shown in the first table as CSV."""
        table = self.query_one("#forecast-first", ForecastTable)
        path = self.config.db_path.parent / EXPORT_FILENAME
        try:
            path.write_text(forecast_csv(table.series) + "\n")
        except OSError as e:
            logger.exception("Forecast export to %s failed", path)
            self.notify(f"Export failed: {e}", severity="error")
            return
        self.notify(f"Forecast exported to {path}", severity="information")

    def action_add(self) -> None:
        """Open the leave/credit dialog for the selected day."""
        table = self.query_one("#forecast-first", ForecastTable)
        target_date = table.selected_date() or self.query_date
        self.push_screen(LeaveDialog(target_date, self.holidays), self.handle_add_result)

    def handle_add_result(self, result: dict | None) -> None:
        """Handle the result from the leave/credit dialog."""
        if result is None:
            return

        if result["action"] == "leave":
            self.planner_state.ledger.add_leave(
                LeaveRecord.date_range(result["start"], result["end"], note=result["note"])
            )
            self.notify(f"Added leave {result['start']} to {result['end']}")
        elif result["action"] == "credit":
            self.planner_state.ledger.add_credit(
                CreditEntry(date=result["date"], hours=result["hours"], note=result["note"])
            )
            self.notify(f"Added {result['hours']:.2f} h credit on {result['date']}")
        self.save_and_refresh()

    def action_settings(self) -> None:
        """Open the balance settings dialog."""
        self.push_screen(SettingsDialog(self.planner_state.config), self.handle_settings_result)

    def handle_settings_result(self, result: PlannerConfig | None) -> None:
        """Replace the configuration with the one saved in the dialog."""
        if result is None:
            return
        self.planner_state.config = result
        self.notify("Balance settings saved")
        self.save_and_refresh()

    def action_help(self) -> None:
        """Show help message."""
        help_text = """
        [bold]Vacation Planner - Keyboard Shortcuts[/bold]

        [cyan]q[/cyan] - Quit application
        [cyan]r[/cyan] - Reload saved data
        [cyan]a[/cyan] - Add leave or a credit on the selected day
        [cyan]c[/cyan] - Edit balance settings
        [cyan]n[/cyan]/[cyan]b[/cyan] - Move query date by one pay period
        [cyan]t[/cyan] - Query today
        [cyan]s[/cyan] - Toggle year / split view
        [cyan]e[/cyan] - Export forecast CSV
        [cyan]?[/cyan] - Show this help

        [bold]Balance:[/bold]
        • Accrual is added on every payday
        • Leave costs 8 hours per business day
        • Credits are added on their date
        """
        self.notify(help_text, title="Help", timeout=10)
