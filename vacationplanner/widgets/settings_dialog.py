"""Dialog for editing the balance configuration."""

import math
from typing import ClassVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from vacationplanner.dates import normalize
from vacationplanner.models import PlannerConfig

FIELDS = (
    ("start-date", "Start date:"),
    ("start-balance", "Start balance (h):"),
    ("accrual", "Accrual per payday:"),
    ("first-payday", "First payday:"),
    ("frequency", "Pay every (days):"),
)


class SettingsDialog(ModalScreen):
    """Modal dialog that replaces the balance configuration as a whole."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("escape", "dismiss", "Cancel"),
    ]

    CSS = """
    SettingsDialog {
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

    Button {
        margin: 0 1;
    }
    """

    def __init__(self, current: PlannerConfig, **kwargs) -> None:
        super().__init__(**kwargs)
        self.current = current

    def compose(self) -> ComposeResult:
        """Compose the dialog."""
        values = self.current_values(self.current)
        with Vertical(id="dialog"):
            yield Static("Balance settings", id="dialog-title")

            for field_id, label in FIELDS:
                with Grid(classes="input-row"):
                    yield Label(label, classes="input-label")
                    yield Input(value=values[field_id], id=field_id)

            with Grid(id="button-row"):
                yield Button("Save", id="save-button", variant="primary")
                yield Button("Cancel", id="cancel-button", variant="default")

    @staticmethod
    def current_values(config: PlannerConfig) -> dict[str, str]:
        """Form values for an existing configuration."""
        return {
            "start-date": config.start_date.isoformat(),
            "start-balance": f"{config.effective_start_balance:g}",
            "accrual": f"{config.effective_accrual_per_period:g}",
            "first-payday": config.effective_first_payday.isoformat(),
            "frequency": str(config.effective_pay_frequency_days),
        }

    @staticmethod
    def parse_settings(values: dict[str, str]) -> PlannerConfig:
        """
        Build a new configuration from form values.

        Raises ValueError naming the first field that does not parse.
        """
        start_date = normalize(values.get("start-date", ""))
        if start_date is None:
            raise ValueError("Start date must be YYYY-MM-DD")
        first_payday = normalize(values.get("first-payday", ""))
        if first_payday is None:
            raise ValueError("First payday must be YYYY-MM-DD")
        try:
            start_balance = float(values.get("start-balance", ""))
        except ValueError:
            raise ValueError("Start balance must be a number") from None
        if not math.isfinite(start_balance):
            raise ValueError("Start balance must be a number")
        try:
            accrual = float(values.get("accrual", ""))
        except ValueError:
            raise ValueError("Accrual must be a number") from None
        if not math.isfinite(accrual):
            raise ValueError("Accrual must be a number")
        if accrual < 0:
            raise ValueError("Accrual cannot be negative")
        try:
            frequency = int(values.get("frequency", ""))
        except ValueError:
            raise ValueError("Pay frequency must be a whole number of days") from None
        if frequency <= 0:
            raise ValueError("Pay frequency must be positive")

        return PlannerConfig(
            start_date=start_date,
            start_balance=start_balance,
            accrual_per_period=accrual,
            first_payday=first_payday,
            pay_frequency_days=frequency,
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "cancel-button":
            self.dismiss(None)
        elif event.button.id == "save-button":
            self.save_settings()

    def save_settings(self) -> None:
        """Validate the form and dismiss with the new configuration."""
        values = {field_id: self.query_one(f"#{field_id}", Input).value for field_id, _ in FIELDS}
        try:
            config = self.parse_settings(values)
        except ValueError as e:
            self.notify(str(e), severity="error")
            return
        self.dismiss(config)
