"""Settings CLI commands for shiftpay.

Manages settings.json - machine-specific paths and preferences.
"""

import click

from shiftpay.sdk import (
    get_profile_path,
    get_settings_path,
    load_settings,
    save_settings,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - profile: path to profile.yaml (set via 'profile use')
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo(f"Effective profile: {get_profile_path(require_exists=False)}")


@settings.command("unset")
@click.argument("key")
def settings_unset(key):
    """Remove KEY from settings.json."""
    current = load_settings()
    if key not in current:
        click.echo(f"{key} was not set.")
        return
    del current[key]
    save_settings(current)
    click.echo(f"Cleared {key} setting.")
