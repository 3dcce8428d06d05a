"""Tests for JSON import/export."""

import json
from datetime import date

import pytest

from vacationplanner.calculator import balance_on
from vacationplanner.dates import add_days
from vacationplanner.errors import StateImportError
from vacationplanner.holidays import FederalHolidays
from vacationplanner.interchange import export_state, import_state
from vacationplanner.models import (
    DEFAULT_FIRST_PAYDAY,
    CreditEntry,
    Ledger,
    LeaveKind,
    LeaveRecord,
    PlannerConfig,
    PlannerContext,
    PlannerState,
)
from vacationplanner.payschedule import DEFAULT_PAY_FREQUENCY_DAYS


@pytest.fixture
def state() -> PlannerState:
    """A state using every record kind."""
    return PlannerState(
        config=PlannerConfig(
            start_date=date(2026, 1, 1),
            start_balance=12.5,
            accrual_per_period=6.15,
            first_payday=date(2026, 1, 2),
            pay_frequency_days=14,
        ),
        ledger=Ledger(
            leave=[
                LeaveRecord.date_range(date(2026, 3, 30), date(2026, 4, 3), note="Spring"),
                LeaveRecord.single_day(date(2026, 2, 16), 4, note="Half day"),
                LeaveRecord.date_range(date(2026, 6, 5), date(2026, 6, 1)),
            ],
            credits=[
                CreditEntry(date=date(2026, 5, 1), hours=10, note="Correction"),
                CreditEntry(date=date(2026, 5, 2), hours=-3),
            ],
        ),
    )


def test_round_trip_preserves_balances(state):
    """Exporting then importing gives the same balance on every day."""
    holidays = FederalHolidays()
    before = PlannerContext.from_state(state, holidays)
    after = PlannerContext.from_state(import_state(export_state(state, holidays)), holidays)

    for offset in range(0, 400, 3):
        day = add_days(date(2025, 12, 1), offset)
        assert balance_on(after, day) == pytest.approx(balance_on(before, day))


def test_export_format(state):
    """The document uses camelCase keys and ISO dates."""
    document = json.loads(export_state(state))

    assert document["startDate"] == "2026-01-01"
    assert document["startBalance"] == 12.5
    assert document["accrualPerPeriod"] == 6.15
    assert document["firstPayday"] == "2026-01-02"
    assert document["payFrequencyDays"] == 14
    assert document["ptoRanges"][0] == {
        "from": "2026-03-30",
        "to": "2026-04-03",
        "hours": 40.0,
        "note": "Spring",
    }
    assert document["ptoEntries"] == [{"date": "2026-02-16", "hours": 4.0, "note": "Half day"}]
    assert document["credits"][0] == {"date": "2026-05-01", "hours": 10.0, "note": "Correction"}


def test_export_recomputes_range_hours_for_holidays():
    """Cached range hours reflect the holiday policy in use."""
    state = PlannerState(
        ledger=Ledger(leave=[LeaveRecord.date_range(date(2026, 5, 25), date(2026, 5, 29))])
    )
    assert json.loads(export_state(state))["ptoRanges"][0]["hours"] == 40.0
    # Memorial Day, May 25
    assert json.loads(export_state(state, FederalHolidays()))["ptoRanges"][0]["hours"] == 32.0


def test_import_original_document():
    """A document written by the original planner imports as-is."""
    state = import_state(
        json.dumps(
            {
                "startDate": "2026-01-01",
                "startBalance": -15.78,
                "accrualPerPeriod": 4.61,
                "firstPayday": "2026-01-08",
                "payFrequencyDays": 14,
                "ptoRanges": [{"from": "2026-01-05", "to": "2026-01-09", "hours": 999, "note": ""}],
                "credits": [{"date": "2026-01-10", "hours": "10", "note": "bonus"}],
            }
        )
    )

    assert state.config.start_balance == -15.78
    [record] = state.ledger.leave
    assert record.kind == LeaveKind.RANGE
    assert record.total_hours() == 40
    assert state.ledger.credits[0].hours == 10.0
    context = PlannerContext.from_state(state)
    assert balance_on(context, "2026-01-10") == pytest.approx(-15.78 + 4.61 - 40 + 10)


def test_import_missing_collections_default_empty():
    """Missing collections become empty and missing fields take defaults."""
    state = import_state('{"startBalance": 3}')
    assert state.config.start_balance == 3.0
    assert state.config.first_payday == DEFAULT_FIRST_PAYDAY
    assert state.ledger.leave == []
    assert state.ledger.credits == []


def test_import_ignores_unknown_fields():
    """Unknown keys are ignored."""
    state = import_state(
        '{"theme": "dark", "credits": [{"date": "2026-01-01", "hours": 1, "x": 2}]}'
    )
    assert len(state.ledger.credits) == 1


def test_import_replaces_invalid_fields_with_defaults():
    """Invalid top-level values fall back to defaults."""
    state = import_state(
        json.dumps(
            {
                "startDate": "soon",
                "startBalance": "lots",
                "accrualPerPeriod": -2,
                "firstPayday": None,
                "payFrequencyDays": 0,
            }
        )
    )
    config = state.config
    assert config.start_date == date(2026, 1, 1)
    assert config.start_balance == -15.78
    assert config.accrual_per_period == 4.61
    assert config.first_payday == DEFAULT_FIRST_PAYDAY
    assert config.pay_frequency_days == DEFAULT_PAY_FREQUENCY_DAYS


def test_import_non_list_collections_become_empty():
    """Collections that are not lists are dropped."""
    state = import_state('{"ptoRanges": "oops", "ptoEntries": {"a": 1}, "credits": null}')
    assert state.ledger.leave == []
    assert state.ledger.credits == []


def test_import_drops_malformed_items():
    """Malformed items are dropped, valid ones kept."""
    state = import_state(
        json.dumps(
            {
                "ptoRanges": [
                    {"from": "2026-02-02", "to": "2026-02-03"},
                    {"from": "bad", "to": "2026-02-03"},
                    {"to": "2026-02-03"},
                    "not an object",
                ],
                "ptoEntries": [{"date": "2026-02-10", "hours": 8, "note": None}],
                "credits": [{"hours": 5}, {"date": "2026-02-11", "hours": 5}],
            }
        )
    )
    kinds = sorted(record.kind.value for record in state.ledger.leave)
    assert kinds == ["range", "single_day"]
    assert [credit.date for credit in state.ledger.credits] == [date(2026, 2, 11)]
    single = next(r for r in state.ledger.leave if r.kind == LeaveKind.SINGLE_DAY)
    assert single.note == ""


@pytest.mark.parametrize("text", ["", "{not json", "[]", '"text"', "42", "null"])
def test_import_corrupt_document_fails(text):
    """Documents that are not JSON objects are rejected."""
    with pytest.raises(StateImportError):
        import_state(text)
