"""Textual widgets for the TUI."""

from vacationplanner.widgets.forecast_table import ForecastTable
from vacationplanner.widgets.leave_dialog import LeaveDialog
from vacationplanner.widgets.settings_dialog import SettingsDialog
from vacationplanner.widgets.summary_panel import SummaryPanel

__all__ = ["ForecastTable", "LeaveDialog", "SettingsDialog", "SummaryPanel"]
