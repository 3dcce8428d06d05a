"""Configuration management."""

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

from vacationplanner.errors import ConfigNotFoundError
from vacationplanner.holidays import HolidayPolicy, get_holiday_policy

CONFIG_DIR = Path.home() / ".config" / "vacationplanner"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.ini"
DEFAULT_DB_PATH = CONFIG_DIR / "planner.db"


@dataclass
class Config:
    """Where the planner keeps its data and which holidays it observes."""

    db_path: Path = DEFAULT_DB_PATH
    holiday_calendar: str = "none"

    @classmethod
    def from_env(cls) -> "Config | None":
        """Load configuration from environment variables."""
        try:
            return cls(
                db_path=Path(os.environ["VACATIONPLANNER_DB_PATH"]).expanduser(),
                holiday_calendar=os.environ.get("VACATIONPLANNER_HOLIDAYS", "none"),
            )
        except KeyError:
            return None

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Config | None":
        """Load configuration from file."""
        if not path.is_file():
            return None

        config = configparser.ConfigParser(interpolation=None)
        config.read(path)
        section = config["planner"] if config.has_section("planner") else {}
        return cls(
            db_path=Path(section.get("dbPath", str(DEFAULT_DB_PATH))).expanduser(),
            holiday_calendar=section.get("holidays", "none"),
        )

    @classmethod
    def require(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Config":
        """Load configuration from the environment or file, or raise."""
        config = cls.from_env() or cls.load(path)
        if config is None:
            msg = f"No configuration found in the environment or at {path}"
            raise ConfigNotFoundError(msg)
        return config

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        config = configparser.ConfigParser(interpolation=None)
        config["planner"] = {
            "dbPath": str(self.db_path),
            "holidays": self.holiday_calendar,
        }
        with path.open("w") as config_file:
            config.write(config_file)

    def holiday_policy(self) -> HolidayPolicy:
        """Instantiate the configured holiday calendar."""
        return get_holiday_policy(self.holiday_calendar)
