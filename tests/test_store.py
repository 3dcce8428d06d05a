"""Tests for the state store."""

import tempfile
from datetime import date
from pathlib import Path

import pytest

from vacationplanner.models import CreditEntry, LeaveRecord, PlannerConfig, PlannerState
from vacationplanner.store import LEGACY_STATE_KEYS, STATE_KEY, StateStore


@pytest.fixture
def temp_store():
    """Create a temporary database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    store = StateStore(db_path)
    yield store

    # Cleanup
    db_path.unlink(missing_ok=True)


def test_load_empty_store_gives_defaults(temp_store):
    """Nothing stored means the default state."""
    assert temp_store.load() == PlannerState()


def test_save_and_load(temp_store):
    """Saving and loading round-trips the state."""
    state = PlannerState(config=PlannerConfig(start_balance=20, accrual_per_period=5))
    state.ledger.add_leave(LeaveRecord.date_range(date(2026, 3, 2), date(2026, 3, 6), note="Trip"))
    state.ledger.add_credit(CreditEntry(date=date(2026, 2, 1), hours=4, note="Fix"))

    temp_store.save(state)
    loaded = temp_store.load()

    assert loaded.config == state.config
    assert loaded.ledger.leave == state.ledger.leave
    assert loaded.ledger.credits == state.ledger.credits


def test_save_overwrites(temp_store):
    """A second save replaces the first."""
    temp_store.save(PlannerState(config=PlannerConfig(start_balance=1)))
    temp_store.save(PlannerState(config=PlannerConfig(start_balance=2)))
    assert temp_store.load().config.start_balance == 2


def test_legacy_key_is_migrated(temp_store):
    """State stored under the legacy key is picked up."""
    temp_store.set_raw(LEGACY_STATE_KEYS[0], '{"startBalance": 7.5, "credits": []}')
    assert temp_store.load().config.start_balance == 7.5


def test_current_key_wins_over_legacy(temp_store):
    """The current key takes precedence."""
    temp_store.set_raw(LEGACY_STATE_KEYS[0], '{"startBalance": 7.5}')
    temp_store.set_raw(STATE_KEY, '{"startBalance": 1.25}')
    assert temp_store.load().config.start_balance == 1.25


def test_corrupt_state_loads_defaults(temp_store):
    """A corrupt document falls back to defaults."""
    temp_store.set_raw(STATE_KEY, "{broken")
    assert temp_store.load() == PlannerState()


def test_clear_all(temp_store):
    """Clearing removes everything."""
    temp_store.save(PlannerState(config=PlannerConfig(start_balance=3)))
    temp_store.clear_all()
    assert temp_store.get_raw(STATE_KEY) is None
