"""Custom exceptions."""


class VacationPlannerError(Exception):
    """Base exception for vacationplanner."""


class InvalidDateError(VacationPlannerError, ValueError):
    """Raised when a date is missing or cannot be parsed."""


class StateImportError(VacationPlannerError):
    """Raised when an interchange document cannot be imported."""


class ConfigNotFoundError(VacationPlannerError):
    """Raised when configuration is not found."""


class UnknownHolidayCalendarError(VacationPlannerError):
    """Raised when a holiday calendar name is not recognized."""


class LedgerIndexError(VacationPlannerError, IndexError):
    """Raised when a ledger record index is out of range."""
