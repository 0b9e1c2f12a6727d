"""Profile CLI commands for shiftpay.

Manages the user's pay profile (profile.yaml) - rate, overtime, pay
period policy, state and tax settings.
"""

from pathlib import Path

import click
import yaml

from shiftpay.sdk import (
    PayProfile,
    ProfileNotFoundError,
    ProfileValidationError,
    build_pay_policy,
    build_pay_profile,
    get_profile_path,
    load_profile,
    set_profile_value,
    set_setting,
)


def _parse_value(raw: str):
    """Parse a CLI value with YAML rules so numbers and null keep their type."""
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


@click.group()
def profile():
    """Manage the pay profile (profile.yaml)."""
    pass


@profile.command("show")
def profile_show():
    """Show the active profile and whether it is valid."""
    path = get_profile_path(require_exists=False)
    click.echo(f"Profile: {path}")

    try:
        data = load_profile(require_exists=True)
    except ProfileNotFoundError as e:
        raise click.ClickException(str(e))

    if data:
        click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip())
    else:
        click.echo("(empty)")

    click.echo()
    try:
        pay_profile = build_pay_profile(data, path)
    except ProfileValidationError as e:
        click.echo(click.style("Invalid:", fg="red"))
        for error in e.errors:
            click.echo(f"  {error}")
        return

    click.echo(click.style("Valid.", fg="green") + " Effective values:")
    for key, value in pay_profile.model_dump(mode="json").items():
        marker = "" if key in data else " (default)"
        click.echo(f"  {key}: {value}{marker}")


@profile.command("set")
@click.argument("key", type=click.Choice(list(PayProfile.model_fields)))
@click.argument("value")
def profile_set(key, value):
    """Set KEY to VALUE in profile.yaml.

    Examples:
        shiftpay profile set hourly_rate 25
        shiftpay profile set pay_period_type weekly
        shiftpay profile set state null
    """
    parsed = _parse_value(value)
    data = load_profile(require_exists=False)
    candidate = dict(data)
    if parsed is None:
        candidate.pop(key, None)
    else:
        candidate[key] = parsed

    # A profile may be built up one key at a time, before hourly_rate is set
    try:
        if "hourly_rate" in candidate:
            build_pay_profile(candidate)
        else:
            build_pay_policy(candidate)
    except ProfileValidationError as e:
        raise click.ClickException(str(e))

    path = set_profile_value(key, parsed)
    click.echo(f"Set {key}: {parsed}")
    click.echo(f"Saved to: {path}")


@profile.command("use")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def profile_use(path):
    """Use the profile at PATH instead of the config directory default."""
    profile_path = Path(path).expanduser().resolve()
    if profile_path.suffix not in (".yaml", ".yml"):
        raise click.ClickException(f"Profile must be a YAML file: {profile_path}")

    with open(profile_path, "r") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise click.ClickException(f"Invalid YAML in {profile_path}: {e}")

    try:
        build_pay_profile(data, profile_path)
    except ProfileValidationError as e:
        raise click.ClickException(str(e))

    settings_path = set_setting("profile", str(profile_path))
    click.echo(f"Using profile: {profile_path}")
    click.echo(f"Saved to: {settings_path}")
