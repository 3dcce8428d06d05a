"""Tests for the command line entry point."""

import json

import pytest

from vacationplanner.__main__ import main


@pytest.fixture(autouse=True)
def planner_env(monkeypatch, tmp_path):
    """Point the planner at a temporary database."""
    monkeypatch.setenv("VACATIONPLANNER_DB_PATH", str(tmp_path / "planner.db"))
    monkeypatch.delenv("VACATIONPLANNER_HOLIDAYS", raising=False)
    return tmp_path


def test_balance_with_leave(capsys):
    """Leave added on the command line is deducted."""
    assert main(["add-leave", "2026-01-05", "2026-01-09"]) == 0
    assert main(["balance", "2026-01-09"]) == 0
    assert capsys.readouterr().out.strip() == "2026-01-09 -51.17 h"


def test_balance_with_credit(capsys):
    """Credits are added from their date on."""
    assert main(["add-credit", "2026-01-10", "10"]) == 0
    main(["balance", "2026-01-09"])
    main(["balance", "2026-01-10"])
    assert capsys.readouterr().out.splitlines() == [
        "2026-01-09 -11.17 h",
        "2026-01-10 -1.17 h",
    ]


def test_invalid_date_fails(capsys):
    """An unparseable date is reported, not computed."""
    assert main(["balance", "someday"]) == 1
    assert capsys.readouterr().out == ""


def test_forecast_csv(capsys):
    """Forecast prints CSV rows for every day."""
    assert main(["forecast", "--start", "2026-01-07", "--days", "2"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "date,hours",
        "2026-01-07,-15.78",
        "2026-01-08,-11.17",
        "2026-01-09,-11.17",
    ]


def test_paydays(capsys):
    """Paydays prints one date per line."""
    assert main(["paydays", "2026-01-01", "2026-01-31"]) == 0
    assert capsys.readouterr().out.splitlines() == ["2026-01-08", "2026-01-22"]


def test_list_and_remove(capsys):
    """Records are listed in date order and removed by index."""
    main(["add-leave", "2026-03-02", "2026-03-06", "--note", "Trip"])
    main(["add-leave", "2026-02-16", "--hours", "4"])
    main(["list"])
    out = capsys.readouterr().out
    assert "[0] 2026-02-16 4.00 h" in out
    assert "[1] 2026-03-02..2026-03-06 40.00 h Trip" in out

    assert main(["remove-leave", "0"]) == 0
    assert main(["remove-leave", "5"]) == 1
    main(["list"])
    assert "[0] 2026-03-02..2026-03-06" in capsys.readouterr().out


def test_export_import(planner_env, capsys):
    """Export writes JSON that import reads back."""
    export_path = planner_env / "state.json"
    main(["add-credit", "2026-02-01", "6", "--note", "Bonus"])
    assert main(["export", str(export_path)]) == 0
    assert json.loads(export_path.read_text())["credits"][0]["note"] == "Bonus"

    main(["remove-credit", "0"])
    assert main(["import", str(export_path)]) == 0
    main(["balance", "2026-02-01"])
    main(["balance", "2026-01-31"])
    first, second = capsys.readouterr().out.splitlines()
    assert float(first.split()[1]) - float(second.split()[1]) == pytest.approx(6)


def test_import_corrupt_keeps_state(planner_env, capsys):
    """A corrupt import fails and leaves the stored state alone."""
    bad = planner_env / "bad.json"
    bad.write_text("{nope")
    main(["add-credit", "2026-01-02", "3"])

    assert main(["import", str(bad)]) == 1
    main(["balance", "2026-01-02"])
    assert capsys.readouterr().out.strip() == "2026-01-02 -12.78 h"


def test_settings_replace_configuration(capsys):
    """Saved settings drive every later balance."""
    assert main(["balance", "2026-01-22"]) == 0
    assert capsys.readouterr().out.strip() == "2026-01-22 -6.56 h"

    assert main(["settings", "--accrual", "5", "--start-balance", "0"]) == 0
    out = capsys.readouterr().out
    assert "Accrual per period: 5.00 h" in out
    assert "Start balance: 0.00 h" in out
    assert "First payday: 2026-01-08" in out

    assert main(["balance", "2026-01-22"]) == 0
    assert capsys.readouterr().out.strip() == "2026-01-22 10.00 h"


def test_settings_pay_schedule(capsys):
    """A new first payday and period move the accrual dates."""
    assert main(["settings", "--first-payday", "2026-01-15", "--frequency", "7"]) == 0
    capsys.readouterr()
    assert main(["paydays", "2026-01-01", "2026-01-31"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "2026-01-15",
        "2026-01-22",
        "2026-01-29",
    ]


def test_settings_without_options_only_shows(capsys):
    """Plain settings prints the current configuration."""
    assert main(["settings"]) == 0
    out = capsys.readouterr().out
    assert "Start date: 2026-01-01" in out
    assert "Pay frequency: 14 days" in out


def test_settings_rejects_invalid_date(capsys):
    """An unparseable settings date fails without saving."""
    assert main(["settings", "--first-payday", "2026-W03-1", "--accrual", "9"]) == 1
    main(["settings"])
    assert "Accrual per period: 4.61 h" in capsys.readouterr().out


def test_summary_shows_balance_after_latest_leave(capsys):
    """The summary reports the balance once the last planned leave is taken."""
    main(["add-leave", "2026-01-05", "2026-01-09"])
    assert main(["summary", "2026-01-02"]) == 0
    assert "Balance after latest leave: -51.17 h" in capsys.readouterr().out


def test_add_leave_hours_with_end_is_rejected(capsys):
    """--hours describes a single day and cannot be combined with an end date."""
    with pytest.raises(SystemExit) as excinfo:
        main(["add-leave", "2026-01-05", "2026-01-09", "--hours", "4"])
    assert excinfo.value.code == 2
    assert "--hours" in capsys.readouterr().err

    main(["list"])
    assert "[0]" not in capsys.readouterr().out
