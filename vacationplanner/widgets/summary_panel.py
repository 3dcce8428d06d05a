"""Summary panel widget showing the headline balance figures."""

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Static

from vacationplanner.models import PlannerSummary


def fmt_hours(hours: float) -> str:
    """Format hours with two decimals, e.g. ``-15.78 h``."""
    return f"{hours:.2f} h"


class SummaryPanel(Container):
    """Panel displaying the balance today, on the query date and upcoming leave."""

    def compose(self) -> ComposeResult:
        """Compose the summary panel."""
        with Horizontal(id="summary-row"):
            with Vertical(classes="stat-box"):
                yield Static("Loading...", id="stat-today")
                yield Static("", id="stat-query")

            with Vertical(classes="stat-box"):
                yield Static("", id="stat-next-payday")
                yield Static("", id="stat-horizon")

            with Vertical(classes="stat-box"):
                yield Static("", id="stat-latest-leave")
                yield Static("", id="stat-future-leave")

    def update_summary(self, summary: PlannerSummary, horizon: str) -> None:
        """Update the displayed figures."""

        def colored(hours: float) -> str:
            color = "red" if hours < 0 else "green"
            return f"[{color}]{fmt_hours(hours)}[/{color}]"

        self.query_one("#stat-today", Static).update(
            f"[bold]Today ({summary.today.isoformat()}):[/bold] {colored(summary.balance_today)}"
        )
        self.query_one("#stat-query", Static).update(
            f"[bold]On {summary.query_date.isoformat()}:[/bold] "
            f"{colored(summary.balance_on_query)}"
        )
        self.query_one("#stat-next-payday", Static).update(
            f"[bold]Next payday:[/bold] {summary.next_payday.isoformat()}"
        )
        self.query_one("#stat-horizon", Static).update(f"[bold]Forecast:[/bold] {horizon}")

        latest = summary.latest_leave.isoformat() if summary.latest_leave else "--"
        self.query_one("#stat-latest-leave", Static).update(
            f"[bold]Latest leave:[/bold] {latest}, then "
            f"{colored(summary.balance_after_latest_leave)}"
        )
        self.query_one("#stat-future-leave", Static).update(
            f"[bold]Planned leave:[/bold] {fmt_hours(summary.future_leave_hours)}"
        )

        self.refresh()
