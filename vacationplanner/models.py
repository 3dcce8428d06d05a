"""Data models for the balance configuration and the leave ledger."""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from vacationplanner.dates import business_hours_inclusive, is_business_day
from vacationplanner.errors import LedgerIndexError
from vacationplanner.holidays import HolidayPolicy, NoHolidays
from vacationplanner.payschedule import DEFAULT_PAY_FREQUENCY_DAYS

DEFAULT_START_DATE = date(2026, 1, 1)
DEFAULT_START_BALANCE = -15.78
DEFAULT_ACCRUAL_PER_PERIOD = 4.61
DEFAULT_FIRST_PAYDAY = date(2026, 1, 8)  # Biweekly Thursday


def to_number(value: object, default: float = 0.0) -> float:
    """Coerce a value to a finite float, falling back to default."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


@dataclass
class PlannerConfig:
    """Balance configuration: starting point and pay schedule."""

    start_date: date = DEFAULT_START_DATE
    start_balance: float = DEFAULT_START_BALANCE
    accrual_per_period: float = DEFAULT_ACCRUAL_PER_PERIOD
    first_payday: date | None = DEFAULT_FIRST_PAYDAY
    pay_frequency_days: int | None = DEFAULT_PAY_FREQUENCY_DAYS

    @property
    def effective_first_payday(self) -> date:
        """First payday, never missing."""
        return self.first_payday or DEFAULT_FIRST_PAYDAY

    @property
    def effective_pay_frequency_days(self) -> int:
        """Pay period length in days, always positive."""
        days = int(to_number(self.pay_frequency_days))
        return days if days > 0 else DEFAULT_PAY_FREQUENCY_DAYS

    @property
    def effective_start_balance(self) -> float:
        return to_number(self.start_balance)

    @property
    def effective_accrual_per_period(self) -> float:
        return max(0.0, to_number(self.accrual_per_period))


class LeaveKind(str, Enum):
    """Shape of a leave record."""

    RANGE = "range"
    SINGLE_DAY = "single_day"


@dataclass
class LeaveRecord:
    """
    Taken (or planned) leave.

    A RANGE record charges 8 hours for every business day in [start, end].
    A SINGLE_DAY record charges its own hours, but only if the day is a
    business day. Hours of a range are never stored; they are recomputed
    against the active holiday policy every time.
    """

    kind: LeaveKind
    start: date
    end: date
    hours: float = 0.0
    note: str = ""

    @classmethod
    def date_range(cls, start: date, end: date, note: str = "") -> "LeaveRecord":
        return cls(kind=LeaveKind.RANGE, start=start, end=end, note=note)

    @classmethod
    def single_day(cls, day: date, hours: float, note: str = "") -> "LeaveRecord":
        return cls(kind=LeaveKind.SINGLE_DAY, start=day, end=day, hours=hours, note=note)

    @property
    def is_malformed(self) -> bool:
        """An inverted range; it charges nothing."""
        return self.end < self.start

    def hours_between(
        self, start: date, end: date, holidays: HolidayPolicy | None = None
    ) -> float:
        """Hours this record charges on the days it shares with [start, end]."""
        if self.kind == LeaveKind.SINGLE_DAY:
            if not start <= self.start <= end or not is_business_day(self.start, holidays):
                return 0.0
            return max(0.0, to_number(self.hours))

        return business_hours_inclusive(max(self.start, start), min(self.end, end), holidays)

    def total_hours(self, holidays: HolidayPolicy | None = None) -> float:
        """Hours charged over the whole record."""
        return self.hours_between(self.start, self.end, holidays)


@dataclass
class CreditEntry:
    """A manual addition to the balance, effective on its date."""

    date: date
    hours: float
    note: str = ""

    @property
    def credited_hours(self) -> float:
        """Hours added to the balance; non-positive or non-numeric hours add nothing."""
        return max(0.0, to_number(self.hours))


@dataclass
class Ledger:
    """Leave and credit records. Insertion order carries no meaning."""

    leave: list[LeaveRecord] = field(default_factory=list)
    credits: list[CreditEntry] = field(default_factory=list)

    def add_leave(self, record: LeaveRecord) -> None:
        self.leave.append(record)

    def remove_leave(self, index: int) -> LeaveRecord:
        """Remove a leave record by its position in ``sorted_leave()``."""
        record = self._at(self.sorted_leave(), index, "leave")
        self.leave.remove(record)
        return record

    def add_credit(self, credit: CreditEntry) -> None:
        self.credits.append(credit)

    def remove_credit(self, index: int) -> CreditEntry:
        """Remove a credit by its position in ``sorted_credits()``."""
        credit = self._at(self.sorted_credits(), index, "credit")
        self.credits.remove(credit)
        return credit

    def sorted_leave(self) -> list[LeaveRecord]:
        return sorted(self.leave, key=lambda record: (record.start, record.end))

    def sorted_credits(self) -> list[CreditEntry]:
        return sorted(self.credits, key=lambda credit: credit.date)

    @staticmethod
    def _at(records: list, index: int, label: str):
        if not 0 <= index < len(records):
            msg = f"No {label} record at index {index} ({len(records)} records)"
            raise LedgerIndexError(msg)
        return records[index]


@dataclass
class PlannerState:
    """Everything that gets persisted: configuration plus ledger."""

    config: PlannerConfig = field(default_factory=PlannerConfig)
    ledger: Ledger = field(default_factory=Ledger)


@dataclass(frozen=True)
class PlannerContext:
    """Read-only view handed to every balance calculation."""

    config: PlannerConfig
    ledger: Ledger
    holidays: HolidayPolicy = field(default_factory=NoHolidays)

    @classmethod
    def from_state(
        cls, state: PlannerState, holidays: HolidayPolicy | None = None
    ) -> "PlannerContext":
        return cls(config=state.config, ledger=state.ledger, holidays=holidays or NoHolidays())


@dataclass(frozen=True)
class ForecastPoint:
    """One day of a forecast series."""

    date: date
    balance: float
    is_payday: bool = False


@dataclass(frozen=True)
class PlannerSummary:
    """Headline figures for a query date."""

    today: date
    query_date: date
    balance_today: float
    balance_on_query: float
    next_payday: date
    latest_leave: date | None
    balance_after_latest_leave: float
    future_leave_hours: float
