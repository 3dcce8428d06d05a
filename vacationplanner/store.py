"""SQLite key/value store for the planner state."""

import logging
import sqlite3
from pathlib import Path

from vacationplanner.config import DEFAULT_DB_PATH
from vacationplanner.errors import StateImportError
from vacationplanner.holidays import HolidayPolicy
from vacationplanner.interchange import export_state, import_state
from vacationplanner.models import PlannerState

logger = logging.getLogger(__name__)

STATE_KEY = "vacation_planner_state_v3"
LEGACY_STATE_KEYS = ("vacation_planner_state_v2",)


class StateStore:
    """Database holding the planner state as a JSON document under a fixed key."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS planner_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()

    def get_raw(self, key: str) -> str | None:
        """Get the stored document for a key."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT value FROM planner_state WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def set_raw(self, key: str, value: str) -> None:
        """Save or replace the document for a key."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO planner_state (key, value) VALUES (?, ?)", (key, value)
            )
            conn.commit()

    def load(self) -> PlannerState:
        """
        Load the current state.

        Falls back to the legacy key when the current one is absent, and to
        defaults when nothing is stored or the stored document is corrupt.
        """
        for key in (STATE_KEY, *LEGACY_STATE_KEYS):
            raw = self.get_raw(key)
            if raw is None:
                continue
            try:
                state = import_state(raw)
            except StateImportError:
                logger.warning("Stored state under %s is corrupt, using defaults", key)
                return PlannerState()
            if key != STATE_KEY:
                logger.info("Migrating planner state from %s", key)
            return state
        return PlannerState()

    def save(self, state: PlannerState, holidays: HolidayPolicy | None = None) -> None:
        """Persist the state under the current key."""
        self.set_raw(STATE_KEY, export_state(state, holidays))

    def clear_all(self) -> None:
        """Remove every stored document."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM planner_state")
            conn.commit()
