"""Main entry point for vacationplanner."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from vacationplanner.calculator import balance_on, require_date, summarize
from vacationplanner.config import DEFAULT_CONFIG_PATH, DEFAULT_DB_PATH, Config
from vacationplanner.errors import VacationPlannerError
from vacationplanner.forecast import YEAR_HORIZON_DAYS, forecast_csv, forecast_series
from vacationplanner.holidays import HOLIDAY_CALENDARS, get_holiday_policy
from vacationplanner.interchange import export_state, import_state
from vacationplanner.models import (
    CreditEntry,
    LeaveKind,
    LeaveRecord,
    PlannerConfig,
    PlannerContext,
)
from vacationplanner.payschedule import paydays_in_range
from vacationplanner.store import StateStore

logger = logging.getLogger("vacationplanner")


def configure() -> None:
    """Interactive configuration setup."""
    # Using sys.stdout.write for interactive prompts is allowed
    sys.stdout.write("Vacation Planner Configuration\n")
    sys.stdout.write("=" * 40 + "\n")
    db_path = input(f"Database path [{DEFAULT_DB_PATH}]: ").strip()
    calendars = "/".join(HOLIDAY_CALENDARS)
    holiday_calendar = input(f"Holiday calendar ({calendars}) [none]: ").strip() or "none"
    # Fail before saving an unusable calendar name
    get_holiday_policy(holiday_calendar)

    config = Config(
        db_path=Path(db_path).expanduser() if db_path else DEFAULT_DB_PATH,
        holiday_calendar=holiday_calendar,
    )
    config.save()
    sys.stdout.write("\n✓ Configuration saved successfully!\n")
    sys.stdout.write(f"Config file: {DEFAULT_CONFIG_PATH}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vacationplanner", description="Leave balance planner and forecaster."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("config", help="Interactive configuration setup")

    balance = commands.add_parser("balance", help="Balance on a date (default: today)")
    balance.add_argument("date", nargs="?")

    summary = commands.add_parser("summary", help="Headline figures for a date")
    summary.add_argument("date", nargs="?")

    forecast = commands.add_parser("forecast", help="Print a forecast as CSV")
    forecast.add_argument("--start", help="First day (default: today)")
    forecast.add_argument("--days", type=int, default=YEAR_HORIZON_DAYS)

    paydays = commands.add_parser("paydays", help="Paydays between two dates")
    paydays.add_argument("start")
    paydays.add_argument("end")

    settings = commands.add_parser("settings", help="Show or replace the balance configuration")
    settings.add_argument("--start-date")
    settings.add_argument("--start-balance", type=float)
    settings.add_argument("--accrual", type=float, help="Hours accrued per payday")
    settings.add_argument("--first-payday")
    settings.add_argument("--frequency", type=int, help="Pay period length in days")

    commands.add_parser("list", help="List leave and credit records")

    add_leave = commands.add_parser("add-leave", help="Record leave")
    add_leave.add_argument("start")
    add_leave.add_argument("end", nargs="?", help="Last day of a range (default: start)")
    add_leave.add_argument(
        "--hours", type=float, help="Record a single day with these hours instead of a range"
    )
    add_leave.add_argument("--note", default="")

    add_credit = commands.add_parser("add-credit", help="Record a credit")
    add_credit.add_argument("date")
    add_credit.add_argument("hours", type=float)
    add_credit.add_argument("--note", default="")

    remove_leave = commands.add_parser("remove-leave", help="Remove leave by list index")
    remove_leave.add_argument("index", type=int)

    remove_credit = commands.add_parser("remove-credit", help="Remove a credit by list index")
    remove_credit.add_argument("index", type=int)

    export = commands.add_parser("export", help="Export the state as JSON")
    export.add_argument("path", type=Path)

    import_ = commands.add_parser("import", help="Replace the state with a JSON document")
    import_.add_argument("path", type=Path)

    return parser


def settings_from_args(current: PlannerConfig, args: argparse.Namespace) -> PlannerConfig:
    """Build a complete new configuration, keeping current values for options not given."""

    def pick(value, fallback):
        return fallback if value is None else value

    return PlannerConfig(
        start_date=require_date(args.start_date) if args.start_date else current.start_date,
        start_balance=pick(args.start_balance, current.start_balance),
        accrual_per_period=pick(args.accrual, current.accrual_per_period),
        first_payday=require_date(args.first_payday) if args.first_payday else current.first_payday,
        pay_frequency_days=pick(args.frequency, current.pay_frequency_days),
    )


def run_command(args: argparse.Namespace, config: Config) -> None:
    """Run one non-interactive command against the stored state."""
    store = StateStore(config.db_path)
    holidays = config.holiday_policy()
    state = store.load()
    context = PlannerContext.from_state(state, holidays)
    today = date.today()
    out = sys.stdout

    if args.command == "balance":
        target = require_date(args.date) if args.date else today
        out.write(f"{target.isoformat()} {balance_on(context, target):.2f} h\n")

    elif args.command == "summary":
        summary = summarize(context, today, args.date)
        latest = summary.latest_leave.isoformat() if summary.latest_leave else "--"
        out.write(f"Balance today ({today.isoformat()}): {summary.balance_today:.2f} h\n")
        out.write(
            f"Balance on {summary.query_date.isoformat()}: {summary.balance_on_query:.2f} h\n"
        )
        out.write(f"Next payday: {summary.next_payday.isoformat()}\n")
        out.write(f"Latest leave: {latest}\n")
        out.write(
            f"Balance after latest leave: {summary.balance_after_latest_leave:.2f} h\n"
        )
        out.write(f"Planned leave from today: {summary.future_leave_hours:.2f} h\n")

    elif args.command == "forecast":
        start = require_date(args.start) if args.start else today
        out.write(forecast_csv(forecast_series(context, start, max(0, args.days))) + "\n")

    elif args.command == "paydays":
        for payday in paydays_in_range(
            require_date(args.start),
            require_date(args.end),
            state.config.effective_first_payday,
            state.config.effective_pay_frequency_days,
        ):
            out.write(f"{payday.isoformat()}\n")

    elif args.command == "settings":
        if any(
            value is not None
            for value in (
                args.start_date,
                args.start_balance,
                args.accrual,
                args.first_payday,
                args.frequency,
            )
        ):
            state.config = settings_from_args(state.config, args)
            store.save(state, holidays)
            logger.info("Saved balance settings")
        settings = state.config
        first_payday = settings.first_payday.isoformat() if settings.first_payday else "--"
        out.write(f"Start date: {settings.start_date.isoformat()}\n")
        out.write(f"Start balance: {settings.effective_start_balance:.2f} h\n")
        out.write(f"Accrual per period: {settings.effective_accrual_per_period:.2f} h\n")
        out.write(f"First payday: {first_payday}\n")
        out.write(f"Pay frequency: {settings.effective_pay_frequency_days} days\n")

    elif args.command == "list":
        out.write("Leave:\n")
        for index, record in enumerate(state.ledger.sorted_leave()):
            span = (
                record.start.isoformat()
                if record.kind == LeaveKind.SINGLE_DAY
                else f"{record.start.isoformat()}..{record.end.isoformat()}"
            )
            out.write(f"  [{index}] {span} {record.total_hours(holidays):.2f} h {record.note}\n")
        out.write("Credits:\n")
        for index, credit in enumerate(state.ledger.sorted_credits()):
            out.write(
                f"  [{index}] {credit.date.isoformat()} {credit.credited_hours:.2f} h"
                f" {credit.note}\n"
            )

    elif args.command == "add-leave":
        start = require_date(args.start)
        if args.hours is not None:
            record = LeaveRecord.single_day(start, args.hours, note=args.note)
        else:
            end = require_date(args.end) if args.end else start
            record = LeaveRecord.date_range(start, end, note=args.note)
        state.ledger.add_leave(record)
        store.save(state, holidays)
        logger.info("Added leave %s..%s", record.start, record.end)

    elif args.command == "add-credit":
        state.ledger.add_credit(
            CreditEntry(date=require_date(args.date), hours=args.hours, note=args.note)
        )
        store.save(state, holidays)
        logger.info("Added %.2f h credit on %s", args.hours, args.date)

    elif args.command == "remove-leave":
        removed = state.ledger.remove_leave(args.index)
        store.save(state, holidays)
        logger.info("Removed leave %s..%s", removed.start, removed.end)

    elif args.command == "remove-credit":
        removed = state.ledger.remove_credit(args.index)
        store.save(state, holidays)
        logger.info("Removed credit on %s", removed.date)

    elif args.command == "export":
        args.path.write_text(export_state(state, holidays))
        logger.info("Exported state to %s", args.path)

    elif args.command == "import":
        imported = import_state(args.path.read_text())
        store.save(imported, holidays)
        logger.info("Imported state from %s", args.path)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "add-leave" and args.hours is not None and args.end is not None:
        parser.error("add-leave: --hours records a single day and cannot be used with END")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "config":
            configure()
            return 0

        if args.command is None:
            config = Config.from_env() or Config.load()
            if not config:
                configure()
                config = Config.require()

            # Imported here so the commands above work without a terminal UI
            from vacationplanner.app import VacationPlannerApp

            app = VacationPlannerApp(config)
            app.run()
            return 0

        run_command(args, Config.from_env() or Config.load() or Config())
    except (VacationPlannerError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
