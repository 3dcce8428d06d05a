"""JSON import/export of the planner state."""

import json
import logging
from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

from vacationplanner.errors import StateImportError
from vacationplanner.holidays import HolidayPolicy
from vacationplanner.models import (
    DEFAULT_ACCRUAL_PER_PERIOD,
    DEFAULT_FIRST_PAYDAY,
    DEFAULT_START_BALANCE,
    DEFAULT_START_DATE,
    CreditEntry,
    Ledger,
    LeaveKind,
    LeaveRecord,
    PlannerConfig,
    PlannerState,
    to_number,
)
from vacationplanner.payschedule import DEFAULT_PAY_FREQUENCY_DAYS

logger = logging.getLogger(__name__)


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("note", mode="before", check_fields=False)
    @classmethod
    def _note_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("hours", mode="before", check_fields=False)
    @classmethod
    def _hours_number(cls, value: Any) -> float:
        return to_number(value)


class LeaveRangeDocument(_Document):
    """``ptoRanges`` item. ``hours`` is informational and recomputed on import."""

    from_: date = Field(alias="from")
    to: date
    hours: float = 0.0
    note: str = ""


class LeaveEntryDocument(_Document):
    """``ptoEntries`` item: leave on a single day."""

    date: date
    hours: float = 0.0
    note: str = ""


class CreditDocument(_Document):
    """``credits`` item."""

    date: date
    hours: float = 0.0
    note: str = ""


class StateDocument(_Document):
    """
    The whole planner state as exchanged in JSON.

    Invalid top-level values fall back to their defaults, non-list collections
    become empty and malformed collection items are dropped. Unknown keys are
    ignored.
    """

    start_date: date = DEFAULT_START_DATE
    start_balance: float = Field(default=DEFAULT_START_BALANCE, allow_inf_nan=False)
    accrual_per_period: float = Field(default=DEFAULT_ACCRUAL_PER_PERIOD, ge=0, allow_inf_nan=False)
    first_payday: date = DEFAULT_FIRST_PAYDAY
    pay_frequency_days: int = Field(default=DEFAULT_PAY_FREQUENCY_DAYS, gt=0)
    pto_ranges: list[LeaveRangeDocument] = Field(default_factory=list)
    pto_entries: list[LeaveEntryDocument] = Field(default_factory=list)
    credits: list[CreditDocument] = Field(default_factory=list)

    @field_validator(
        "start_date",
        "start_balance",
        "accrual_per_period",
        "first_payday",
        "pay_frequency_days",
        mode="wrap",
    )
    @classmethod
    def _default_when_invalid(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            logger.warning("Invalid %s %r, using default", info.field_name, value)
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)

    @field_validator("pto_ranges", "pto_entries", "credits", mode="wrap")
    @classmethod
    def _drop_invalid_items(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> list:
        if not isinstance(value, list):
            if value is not None:
                logger.warning("Ignoring non-list %s", info.field_name)
            return []

        items = []
        for item in value:
            try:
                items.extend(handler([item]))
            except ValidationError:
                logger.warning("Dropping invalid %s item %r", info.field_name, item)
        return items


def state_to_document(
    state: PlannerState, holidays: HolidayPolicy | None = None
) -> StateDocument:
    """Build the interchange document, recomputing range hours for the given policy."""
    config = state.config
    ranges = []
    entries = []
    for record in state.ledger.sorted_leave():
        if record.kind == LeaveKind.SINGLE_DAY:
            entries.append(
                LeaveEntryDocument(date=record.start, hours=record.hours, note=record.note)
            )
        else:
            ranges.append(
                LeaveRangeDocument(
                    from_=record.start,
                    to=record.end,
                    hours=record.total_hours(holidays),
                    note=record.note,
                )
            )

    return StateDocument(
        start_date=config.start_date,
        start_balance=config.effective_start_balance,
        accrual_per_period=config.effective_accrual_per_period,
        first_payday=config.effective_first_payday,
        pay_frequency_days=config.effective_pay_frequency_days,
        pto_ranges=ranges,
        pto_entries=entries,
        credits=[
            CreditDocument(date=credit.date, hours=credit.hours, note=credit.note)
            for credit in state.ledger.sorted_credits()
        ],
    )


def document_to_state(document: StateDocument) -> PlannerState:
    config = PlannerConfig(
        start_date=document.start_date,
        start_balance=document.start_balance,
        accrual_per_period=document.accrual_per_period,
        first_payday=document.first_payday,
        pay_frequency_days=document.pay_frequency_days,
    )
    leave = [
        LeaveRecord.date_range(item.from_, item.to, note=item.note) for item in document.pto_ranges
    ]
    leave.extend(
        LeaveRecord.single_day(item.date, item.hours, note=item.note)
        for item in document.pto_entries
    )
    credits = [
        CreditEntry(date=item.date, hours=item.hours, note=item.note) for item in document.credits
    ]
    return PlannerState(config=config, ledger=Ledger(leave=leave, credits=credits))


def export_state(state: PlannerState, holidays: HolidayPolicy | None = None) -> str:
    """Serialize the state to a JSON document."""
    return state_to_document(state, holidays).model_dump_json(by_alias=True, indent=2)


def import_state(text: str | bytes) -> PlannerState:
    """
    Parse a JSON document into a fresh state.

    Raises StateImportError when the document is not a JSON object.
    """
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as e:
        msg = f"Not a valid JSON document: {e}"
        raise StateImportError(msg) from e

    if not isinstance(raw, dict):
        msg = f"Expected a JSON object, got {type(raw).__name__}"
        raise StateImportError(msg)

    try:
        document = StateDocument.model_validate(raw)
    except ValidationError as e:
        msg = f"Invalid planner document: {e}"
        raise StateImportError(msg) from e
    return document_to_state(document)
