"""Dialog for recording leave or a credit starting on a selected day."""

from datetime import date
from typing import ClassVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from vacationplanner.dates import business_hours_inclusive, normalize
from vacationplanner.holidays import HolidayPolicy


class LeaveDialog(ModalScreen):
    """Modal dialog for adding a leave range or a credit."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("escape", "dismiss", "Cancel"),
    ]

    CSS = """
    LeaveDialog {
        align: center middle;
    }

    #dialog {
        width: 60;
        height: auto;
        background: $panel;
        border: thick $primary;
        padding: 1 2;
    }

    #dialog-title {
        width: 100%;
        text-align: center;
        margin-bottom: 1;
        text-style: bold;
    }

    .input-row {
        height: auto;
        margin: 1 0;
    }

    .input-label {
        width: 20;
        padding-right: 1;
    }

    #button-row {
        width: 100%;
        height: auto;
        margin-top: 1;
    }

    #leave-preview {
        padding-left: 21;
        color: $text-muted;
    }

    Button {
        margin: 0 1;
    }
    """

    def __init__(
        self, target_date: date, holidays: HolidayPolicy | None = None, **kwargs
    ) -> None:
        super().__init__(**kwargs)
        self.target_date = target_date
        self.holidays = holidays
        self.credit_mode = False

    def compose(self) -> ComposeResult:
        """Compose the dialog."""
        with Vertical(id="dialog"):
            yield Static(
                f"Starting {self.target_date.strftime('%Y-%m-%d (%a)')}", id="dialog-title"
            )

            with Grid(classes="input-row"):
                yield Label("Record:", classes="input-label")
                yield Button("Leave", id="kind-toggle", variant="default")

            with Grid(classes="input-row"):
                yield Label("Leave until:", classes="input-label")
                yield Input(value=self.target_date.isoformat(), id="until")
            yield Static(
                self.leave_cost_text(self.target_date, self.target_date.isoformat(), self.holidays),
                id="leave-preview",
            )

            with Grid(classes="input-row"):
                yield Label("Credit hours:", classes="input-label")
                yield Input(placeholder="8 or 7:30", id="credit-hours")

            with Grid(classes="input-row"):
                yield Label("Note:", classes="input-label")
                yield Input(placeholder="Optional note", id="note")

            with Grid(id="button-row"):
                yield Button("Save", id="save-button", variant="primary")
                yield Button("Cancel", id="cancel-button", variant="default")

    @staticmethod
    def leave_cost_text(
        start: date, until_value: str, holidays: HolidayPolicy | None = None
    ) -> str:
        """Describe the hours a range from start to until_value would cost."""
        until = normalize(until_value)
        if until is None or until < start:
            return "Leave cost: --"
        hours = business_hours_inclusive(start, until, holidays)
        return f"Leave cost: {hours:.2f} h"

    def on_input_changed(self, event: Input.Changed) -> None:
        """Keep the leave cost preview in step with the end date."""
        if event.input.id == "until":
            preview = self.leave_cost_text(self.target_date, event.value, self.holidays)
            self.query_one("#leave-preview", Static).update(preview)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "cancel-button":
            self.dismiss(None)
        elif event.button.id == "save-button":
            self.save_record()
        elif event.button.id == "kind-toggle":
            self.toggle_kind()

    def toggle_kind(self) -> None:
        """Switch between recording leave and a credit."""
        button = self.query_one("#kind-toggle", Button)
        self.credit_mode = not self.credit_mode
        button.label = "Credit" if self.credit_mode else "Leave"
        button.variant = "success" if self.credit_mode else "default"

    @staticmethod
    def parse_hours(value: str) -> float:
        """Parse hours from either HH:MM format or decimal (e.g., '7:30' or '7.5')."""
        value = value.strip()
        if not value or value == "0":
            return 0.0

        # Check for HH:MM format
        if ":" in value:
            parts = value.split(":")
            if len(parts) != 2:
                raise ValueError(f"Invalid time format: {value}")
            hours = int(parts[0])
            minutes = int(parts[1])
            if minutes < 0 or minutes >= 60:
                raise ValueError(f"Minutes must be 0-59: {value}")
            return hours + (minutes / 60.0)
        # Decimal format
        return float(value)

    def save_record(self) -> None:
        """Validate the inputs and dismiss with the record to add."""
        note = self.query_one("#note", Input).value or ""

        if self.credit_mode:
            try:
                hours = self.parse_hours(self.query_one("#credit-hours", Input).value)
            except ValueError as e:
                self.notify(
                    f"Invalid format: {e}. Use HH:MM or decimal (e.g., 7:30 or 7.5)",
                    severity="error",
                )
                return
            if hours <= 0:
                self.notify("Credit hours must be positive", severity="error")
                return
            self.dismiss(
                {"action": "credit", "date": self.target_date, "hours": hours, "note": note}
            )
            return

        until = normalize(self.query_one("#until", Input).value)
        if until is None:
            self.notify("End date must be YYYY-MM-DD", severity="error")
            return
        if until < self.target_date:
            self.notify("End date cannot be before the start date", severity="error")
            return
        self.dismiss({"action": "leave", "start": self.target_date, "end": until, "note": note})
