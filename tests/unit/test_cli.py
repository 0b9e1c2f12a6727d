"""CLI tests using click's CliRunner with an isolated config directory."""

import json

import pytest
import yaml
from click.testing import CliRunner

from shiftpay.cli.__main__ import cli


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "config"
    monkeypatch.setenv("SHIFTPAY_CONFIG_PATH", str(path))
    return path


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def entries_file(tmp_path):
    """Boundary week: 38h before the Dec 10 cutover and 10h after it."""
    entries = [
        {"start": "2024-12-08T08:00:00", "end": "2024-12-08T21:00:00"},
        {"start": "2024-12-09T08:00:00", "end": "2024-12-09T21:00:00"},
        {"start": "2024-12-10T08:00:00", "end": "2024-12-10T20:00:00"},
        {"start": "2024-12-11T08:00:00", "end": "2024-12-11T13:30:00",
         "breaks": [{"start": "2024-12-11T10:00:00", "end": "2024-12-11T10:30:00"}]},
        {"start": "2024-12-12T08:00:00", "end": "2024-12-12T13:00:00"},
    ]
    path = tmp_path / "entries.yaml"
    with open(path, "w") as f:
        yaml.dump({"entries": entries}, f)
    return path


class TestRoundCommand:

    def test_clock_in(self, runner):
        result = runner.invoke(cli, ["round", "2024-05-06 08:07:42"])

        assert result.exit_code == 0
        assert result.output.strip() == "2024-05-06 08:05:00"

    def test_clock_out(self, runner):
        result = runner.invoke(cli, ["round", "2024-05-06 08:07:42", "--clock-out", "--interval", "15"])

        assert result.output.strip() == "2024-05-06 08:15:00"


class TestPeriodCommands:

    def test_monthly_period(self, runner):
        result = runner.invoke(cli, ["period", "2024-05-15", "--type", "monthly", "--end-day", "10"])

        assert result.exit_code == 0
        assert result.output.strip() == "2024-05-11 00:00:00.000 to 2024-06-10 23:59:59.999"

    def test_period_uses_profile_settings(self, runner):
        runner.invoke(cli, ["profile", "set", "pay_period_type", "weekly"])

        result = runner.invoke(cli, ["period", "2024-05-08", "--json"])

        data = json.loads(result.output)
        assert data["start"] == "2024-05-05T00:00:00"
        assert data["end"] == "2024-05-11T23:59:59.999000"

    def test_periods_newest_first(self, runner):
        result = runner.invoke(cli, ["periods", "2024-03-01", "--until", "2024-05-15"])

        lines = result.output.strip().splitlines()
        assert lines[0] == "2024-05-11 to 2024-06-10"
        assert lines[-1] == "2024-02-11 to 2024-03-10"

    def test_weeks_marks_clipped_weeks(self, runner):
        result = runner.invoke(cli, ["weeks", "2024-05-20"])

        assert result.exit_code == 0
        assert "Week 1: Sat 2024-05-11 to Sat 2024-05-11 (calendar week 2024-05-05 to 2024-05-11)" in result.output
        assert "Week 6:" in result.output


class TestPayCommand:

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["pay", "45", "--rate", "20", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["regular_hours"] == 40
        assert data["overtime_hours"] == 5
        assert data["gross_pay"] == 950

    def test_hours_already_worked(self, runner):
        result = runner.invoke(cli, ["pay", "10", "--rate", "20", "--already", "35", "--json"])

        data = json.loads(result.output)
        assert (data["regular_hours"], data["overtime_hours"]) == (5, 5)

    def test_missing_rate_fails(self, runner):
        result = runner.invoke(cli, ["pay", "10"])

        assert result.exit_code != 0
        assert "hourly_rate" in result.output


class TestEstimateCommand:

    def test_later_period_gets_boundary_overtime(self, runner, entries_file):
        result = runner.invoke(cli, [
            "estimate", str(entries_file), "--date", "2024-12-15", "--rate", "20", "--json",
        ])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["period"]["start"] == "2024-12-11T00:00:00"
        assert data["calculation"]["regular_hours"] == pytest.approx(2)
        assert data["calculation"]["overtime_hours"] == pytest.approx(8)
        assert data["weekly_breakdown"][0]["calculation"]["overtime_hours"] == pytest.approx(8)

    def test_text_output(self, runner, entries_file):
        result = runner.invoke(cli, ["estimate", str(entries_file), "--date", "2024-12-05", "--rate", "20"])

        assert result.exit_code == 0
        assert "Pay period: 2024-11-11 to 2024-12-10" in result.output
        assert "Weekly breakdown" in result.output

    def test_invalid_entry_reported(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- {start: '2024-12-11T13:00:00', end: '2024-12-11T08:00:00'}\n")

        result = runner.invoke(cli, ["estimate", str(path), "--rate", "20"])

        assert result.exit_code != 0
        assert "entry 1 is invalid" in result.output


class TestProfileCommands:

    def test_set_then_show(self, runner, config_dir):
        result = runner.invoke(cli, ["profile", "set", "hourly_rate", "25"])
        assert result.exit_code == 0
        assert (config_dir / "profile.yaml").exists()

        result = runner.invoke(cli, ["profile", "show"])

        assert result.exit_code == 0
        assert "Valid." in result.output
        assert "hourly_rate: 25.0" in result.output
        assert "overtime_multiplier: 1.5 (default)" in result.output

    def test_set_rejects_invalid_value(self, runner, config_dir):
        result = runner.invoke(cli, ["profile", "set", "pay_period_end_day", "40"])

        assert result.exit_code != 0
        assert not (config_dir / "profile.yaml").exists()

    def test_set_rejects_unknown_key(self, runner):
        result = runner.invoke(cli, ["profile", "set", "hourly_wage", "25"])
        assert result.exit_code != 0

    def test_show_without_profile_fails(self, runner):
        result = runner.invoke(cli, ["profile", "show"])
        assert result.exit_code != 0

    def test_use_then_unset(self, runner, tmp_path):
        custom = tmp_path / "work.yaml"
        custom.write_text("hourly_rate: 31\nstate: TX\n")

        result = runner.invoke(cli, ["profile", "use", str(custom)])
        assert result.exit_code == 0

        result = runner.invoke(cli, ["pay", "1", "--json"])
        assert json.loads(result.output)["gross_pay"] == 31

        result = runner.invoke(cli, ["settings", "unset", "profile"])
        assert "Cleared profile setting." in result.output

        result = runner.invoke(cli, ["settings", "show"])
        assert "No settings configured" in result.output


def test_tax_command(runner):
    result = runner.invoke(cli, ["tax", "2000", "--annual", "48000", "--state", "TX"])

    assert result.exit_code == 0
    assert "State:     $0.00 (0.00%)" in result.output
    assert "annualized $48,000.00" in result.output


class TestProfileValidationAcrossCommands:

    @pytest.fixture
    def bad_period_type(self, config_dir):
        config_dir.mkdir(parents=True, exist_ok=True)
        (config_dir / "profile.yaml").write_text("hourly_rate: 20\npay_period_type: Weekly\n")

    @pytest.mark.parametrize("args", [
        ["period", "2024-05-08"],
        ["weeks", "2024-05-08"],
        ["periods", "2024-05-01"],
        ["tax", "2000"],
        ["pay", "10"],
    ])
    def test_invalid_profile_rejected_everywhere(self, runner, bad_period_type, args):
        result = runner.invoke(cli, args)

        assert result.exit_code != 0
        assert "pay_period_type" in result.output

    def test_profile_without_rate_drives_period_commands(self, runner, config_dir):
        config_dir.mkdir(parents=True, exist_ok=True)
        (config_dir / "profile.yaml").write_text("pay_period_type: weekly\n")

        result = runner.invoke(cli, ["weeks", "2024-05-08"])

        assert result.exit_code == 0
        assert "Pay period: 2024-05-05 to 2024-05-11" in result.output
