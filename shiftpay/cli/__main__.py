"""shiftpay CLI - Pay periods, overtime and paycheck estimates from the command line."""

import json
from datetime import datetime
from pathlib import Path

import click
import yaml

from shiftpay import __version__
from shiftpay.sdk import (
    Break,
    PayPeriodType,
    ProfileNotFoundError,
    ProfileValidationError,
    WorkInterval,
    apply_clock_in_rounding,
    apply_clock_out_rounding,
    calculate_net_pay,
    annualize,
    estimate_hours,
    estimate_paycheck,
    get_current_pay_period,
    get_weeks_in_pay_period,
    list_pay_periods,
    load_pay_policy,
    load_pay_profile,
    round_interval,
    total_break_minutes,
)
from shiftpay.sdk.logging_config import configure_logging

from .profile_commands import profile as profile_group
from .settings_commands import settings as settings_group

DATETIME = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"])


def _money(amount: float) -> str:
    return f"-${abs(amount):,.2f}" if amount < 0 else f"${amount:,.2f}"


def _stamp(instant: datetime) -> str:
    return instant.strftime("%Y-%m-%d %H:%M:%S.") + f"{instant.microsecond // 1000:03d}"


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _profile_from_options(**overrides):
    """Load the active profile with CLI options layered on top."""
    try:
        return load_pay_profile(overrides=overrides, require_exists=False)
    except ProfileNotFoundError as e:
        raise click.ClickException(str(e))
    except ProfileValidationError as e:
        raise click.ClickException(f"{e}\n\nSet missing values with 'shiftpay profile set' or pass options.")


def _policy_from_options(**overrides):
    """Validated profile settings for commands that need no hourly rate."""
    try:
        return load_pay_policy(overrides=overrides)
    except ProfileValidationError as e:
        raise click.ClickException(f"{e}\n\nFix the profile with 'shiftpay profile set' or pass options.")


def _period_settings(period_type, end_day):
    policy = _policy_from_options(pay_period_type=period_type, pay_period_end_day=end_day)
    return policy.pay_period_type, policy.pay_period_end_day


def _echo_calculation(calc, indent: str = "") -> None:
    click.echo(f"{indent}Regular:   {calc.regular_hours:7.2f}h  {_money(calc.regular_pay)}")
    click.echo(f"{indent}Overtime:  {calc.overtime_hours:7.2f}h  {_money(calc.overtime_pay)}")
    click.echo(f"{indent}Gross:     {_money(calc.gross_pay)}")
    click.echo(f"{indent}Federal:   {_money(calc.federal_tax)}")
    click.echo(f"{indent}State:     {_money(calc.state_tax)} ({calc.effective_state_tax_rate:.2%})")
    click.echo(f"{indent}FICA:      {_money(calc.fica)} (SS {_money(calc.social_security)}, Medicare {_money(calc.medicare)})")
    click.echo(f"{indent}Net:       {_money(calc.net_pay)}")


def load_entries_file(path: Path) -> list[WorkInterval]:
    """Load work intervals from a YAML or JSON file.

    The file holds a list (or an 'entries' key with a list) of mappings
    with start, end and either break_minutes or a breaks list.
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("entries", [])
    if not isinstance(data, list):
        raise click.ClickException(f"{path}: expected a list of entries, got {type(data).__name__}")

    entries = []
    for index, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise click.ClickException(f"{path}: entry {index} is not a mapping")
        item = dict(item)
        breaks = item.pop("breaks", None)
        try:
            if breaks is not None:
                item["break_minutes"] = total_break_minutes(Break.model_validate(b) for b in breaks)
            entries.append(WorkInterval.model_validate(item))
        except ValueError as e:
            raise click.ClickException(f"{path}: entry {index} is invalid: {e}")
    return entries


@click.group()
@click.version_option(version=__version__, prog_name="shiftpay")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """shiftpay - Pay periods, overtime and paycheck estimates.

    The pay profile is loaded from (in order):

    \b
    1. SHIFTPAY_CONFIG_PATH environment variable
    2. settings.json 'profile' key (if set via CLI)
    3. ~/.config/shiftpay/profile.yaml (XDG default)

    Run 'shiftpay profile show' to see the active profile.
    """
    configure_logging("DEBUG" if verbose else None)


cli.add_command(profile_group)
cli.add_command(settings_group)


@cli.command("round")
@click.argument("instant", type=DATETIME)
@click.option("--interval", "-i", type=int, default=5, show_default=True, help="Rounding interval in minutes (0 disables).")
@click.option("--clock-out", is_flag=True, help="Round as a clock-out (up) instead of a clock-in (down).")
def round_cmd(instant, interval, clock_out):
    """Round a clock time the way it is stored at ingestion."""
    if clock_out:
        rounded = apply_clock_out_rounding(instant, interval)
    else:
        rounded = apply_clock_in_rounding(instant, interval)
    click.echo(rounded.strftime("%Y-%m-%d %H:%M:%S"))


@cli.command("period")
@click.argument("instant", type=DATETIME, required=False)
@click.option("--type", "period_type", type=click.Choice([t.value for t in PayPeriodType]), help="Pay period type (default: profile).")
@click.option("--end-day", type=click.IntRange(1, 31), help="Monthly cutover day (default: profile).")
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def period_cmd(instant, period_type, end_day, as_json):
    """Show the pay period containing INSTANT (default: now)."""
    period_type, end_day = _period_settings(period_type, end_day)
    period = get_current_pay_period(instant, period_type, end_day)
    if as_json:
        _echo_json(period.model_dump(mode="json"))
        return
    click.echo(f"{_stamp(period.start)} to {_stamp(period.end)}")


@cli.command("periods")
@click.argument("since", type=DATETIME)
@click.option("--until", type=DATETIME, help="Latest date (default: now).")
@click.option("--type", "period_type", type=click.Choice([t.value for t in PayPeriodType]), help="Pay period type (default: profile).")
@click.option("--end-day", type=click.IntRange(1, 31), help="Monthly cutover day (default: profile).")
def periods_cmd(since, until, period_type, end_day):
    """List pay periods from SINCE up to now, newest first."""
    period_type, end_day = _period_settings(period_type, end_day)
    for period in list_pay_periods(since, until, period_type, end_day):
        click.echo(f"{period.start:%Y-%m-%d} to {period.end:%Y-%m-%d}")


@cli.command("weeks")
@click.argument("instant", type=DATETIME, required=False)
@click.option("--type", "period_type", type=click.Choice([t.value for t in PayPeriodType]), help="Pay period type (default: profile).")
@click.option("--end-day", type=click.IntRange(1, 31), help="Monthly cutover day (default: profile).")
def weeks_cmd(instant, period_type, end_day):
    """Show the calendar weeks of the pay period containing INSTANT."""
    period_type, end_day = _period_settings(period_type, end_day)
    period = get_current_pay_period(instant, period_type, end_day)
    click.echo(f"Pay period: {period.start:%Y-%m-%d} to {period.end:%Y-%m-%d}")
    for week in get_weeks_in_pay_period(period):
        line = f"  Week {week.week_number}: {week.start:%a %Y-%m-%d} to {week.end:%a %Y-%m-%d}"
        if week.is_clipped:
            line += f" (calendar week {week.calendar_start:%Y-%m-%d} to {week.calendar_end:%Y-%m-%d})"
        click.echo(line)


@cli.command("pay")
@click.argument("hours", type=float)
@click.option("--rate", type=float, help="Hourly rate (default: profile).")
@click.option("--already", type=float, default=0.0, show_default=True, help="Hours already worked this week.")
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def pay_cmd(hours, rate, already, as_json):
    """Estimate pay for working HOURS more hours this week."""
    profile = _profile_from_options(hourly_rate=rate)
    calc = estimate_hours(profile, hours, weekly_hours_already=already)
    if as_json:
        _echo_json(calc.model_dump())
        return
    click.echo(f"{hours:.2f}h at {_money(profile.hourly_rate)}/h ({already:.2f}h already this week)")
    _echo_calculation(calc)


@cli.command("estimate")
@click.argument("entries_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--date", "instant", type=DATETIME, help="Any date inside the pay period (default: now).")
@click.option("--rate", type=float, help="Hourly rate (default: profile).")
@click.option("--round/--no-round", "apply_rounding", default=False, help="Apply the profile's clock rounding to entries first.")
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def estimate_cmd(entries_file, instant, rate, apply_rounding, as_json):
    """Estimate the paycheck for a pay period from ENTRIES_FILE.

    ENTRIES_FILE is YAML or JSON: a list of entries with start, end and
    break_minutes (or a breaks list). Include every entry of the calendar
    weeks that touch the pay period so weekly overtime is exact.
    """
    profile = _profile_from_options(hourly_rate=rate)
    entries = load_entries_file(entries_file)
    if apply_rounding:
        entries = [round_interval(e, profile.rounding_interval) for e in entries]

    period = get_current_pay_period(instant, profile.pay_period_type, profile.pay_period_end_day)
    estimate = estimate_paycheck(profile, entries, period=period)

    if as_json:
        _echo_json(estimate.model_dump(mode="json"))
        return

    click.echo(f"Pay period: {period.start:%Y-%m-%d} to {period.end:%Y-%m-%d}")
    _echo_calculation(estimate.calculation, indent="  ")
    if estimate.adjustment:
        click.echo(f"  (includes adjustment of {_money(estimate.adjustment)})")
    click.echo()
    click.echo("Weekly breakdown (full calendar weeks):")
    for row in estimate.weekly_breakdown:
        week = row.week
        calc = row.calculation
        click.echo(
            f"  Week {week.week_number} {week.start:%m/%d}-{week.end:%m/%d}: "
            f"{calc.regular_hours:.2f}h reg, {calc.overtime_hours:.2f}h OT, gross {_money(calc.gross_pay)}"
            f" | in period {row.period_regular_hours:.2f}h reg, {row.period_overtime_hours:.2f}h OT"
        )


@cli.command("tax")
@click.argument("gross", type=float)
@click.option("--annual", type=float, help="Annual gross for bracket selection (default: GROSS x 24).")
@click.option("--state", help="State code (default: profile).")
@click.option("--state-rate", type=float, help="Custom flat state rate, e.g. 0.05.")
@click.option("--filing-status", type=click.Choice(["single", "mfj", "hoh"]), help="Filing status (default: profile).")
def tax_cmd(gross, annual, state, state_rate, filing_status):
    """Estimate taxes withheld from a GROSS paycheck."""
    policy = _policy_from_options(state=state, custom_state_tax_rate=state_rate, filing_status=filing_status)
    annual_gross = annual if annual is not None else annualize(gross)
    taxes = calculate_net_pay(
        gross,
        annual_gross,
        state=policy.state,
        custom_rate=policy.custom_state_tax_rate,
        filing_status=policy.filing_status,
    )
    click.echo(f"Gross:     {_money(gross)} (annualized {_money(annual_gross)})")
    click.echo(f"Federal:   {_money(taxes.federal_tax)}")
    click.echo(f"State:     {_money(taxes.state_tax)} ({taxes.effective_state_tax_rate:.2%})")
    click.echo(f"FICA:      {_money(taxes.fica)}")
    click.echo(f"Net:       {_money(taxes.net_pay)}")


def main():
    cli()


if __name__ == "__main__":
    main()
