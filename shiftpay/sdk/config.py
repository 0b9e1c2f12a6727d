"""Configuration management for shiftpay.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - profile: path to profile.yaml (optional, if not colocated)

2. profile.yaml - The user's pay profile
   - hourly_rate, overtime_multiplier
   - pay_period_type, pay_period_end_day
   - state, custom_state_tax_rate, filing_status
   - paycheck_adjustment, rounding_interval

Config directory resolution:
1. SHIFTPAY_CONFIG_PATH environment variable (if set)
2. ~/.config/shiftpay/ (XDG_CONFIG_HOME fallback)

Profile resolution:
1. settings.json "profile" key (if set)
2. profile.yaml in same config directory
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .schemas import PayPolicy, PayProfile


APP_NAME = "shiftpay"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


class ProfileValidationError(Exception):
    """Raised when profile.yaml does not describe a valid pay profile."""

    def __init__(self, path: Optional[Path], errors: list[str]):
        self.path = path
        self.errors = errors
        location = f" in {path}" if path else ""
        super().__init__(f"Invalid pay profile{location}:\n  " + "\n  ".join(errors))


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. SHIFTPAY_CONFIG_PATH environment variable
    2. ~/.config/shiftpay/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("SHIFTPAY_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings (empty dict if the file doesn't exist)."""
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    settings = load_settings()
    custom_profile = settings.get("profile")
    if custom_profile:
        profile_path = Path(custom_profile)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Update with: shiftpay profile use /path/to/profile.yaml"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found. Checked:\n"
            f"  1. settings.json 'profile' key (not set)\n"
            f"  2. {profile_path} (not found)\n\n"
            f"Create one with: shiftpay profile set hourly_rate 25"
        )

    return profile_path


def load_profile(require_exists: bool = True) -> dict:
    """Load the raw profile dictionary from profile.yaml.

    Returns:
        Profile dictionary (empty dict if not required and not found)

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    profile_path = get_profile_path(require_exists=require_exists)

    if not profile_path.exists():
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save the raw profile dictionary to profile.yaml."""
    if path is None:
        path = get_profile_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def get_profile_value(key: str, default: Any = None) -> Any:
    return load_profile(require_exists=False).get(key, default)


def set_profile_value(key: str, value: Any) -> Path:
    """Set one profile key, rejecting keys PayProfile does not define.

    Returns:
        Path to the saved profile file
    """
    if key not in PayProfile.model_fields:
        valid = ", ".join(PayProfile.model_fields)
        raise KeyError(f"Unknown profile key '{key}'. Valid keys: {valid}")

    profile = load_profile(require_exists=False)
    if value is None:
        profile.pop(key, None)
    else:
        profile[key] = value
    return save_profile(profile)


def _format_validation_errors(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "profile"
        messages.append(f"{field}: {item['msg']}")
    return messages


def build_pay_profile(data: dict, path: Optional[Path] = None) -> PayProfile:
    """Validate a raw profile dictionary into a PayProfile.

    Raises:
        ProfileValidationError: With one readable message per bad field
    """
    try:
        return PayProfile.model_validate(data)
    except ValidationError as e:
        raise ProfileValidationError(path, _format_validation_errors(e)) from e


def build_pay_policy(data: dict, path: Optional[Path] = None) -> PayPolicy:
    """Validate every profile field except hourly_rate into a PayPolicy."""
    policy_data = {k: v for k, v in data.items() if k != "hourly_rate"}
    try:
        return PayPolicy.model_validate(policy_data)
    except ValidationError as e:
        raise ProfileValidationError(path, _format_validation_errors(e)) from e


def _merged_profile_data(overrides: Optional[dict], require_exists: bool) -> tuple[dict, Optional[Path]]:
    path = get_profile_path(require_exists=require_exists)
    data = load_profile(require_exists=require_exists)
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return data, path if path.exists() else None


def load_pay_profile(overrides: Optional[dict] = None, require_exists: bool = True) -> PayProfile:
    """Load and validate the active pay profile.

    Args:
        overrides: Values that replace profile keys (e.g. CLI options).
            Keys with a None value are ignored.
        require_exists: If False, a missing profile is treated as empty so
            overrides alone can build a profile.

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
        ProfileValidationError: If the merged values are not a valid profile
    """
    data, path = _merged_profile_data(overrides, require_exists)
    return build_pay_profile(data, path)


def load_pay_policy(overrides: Optional[dict] = None) -> PayPolicy:
    """Load and validate the active profile without requiring hourly_rate.

    A missing profile counts as empty, so the PayPolicy defaults apply.
    The stored hourly_rate is not checked.

    Raises:
        ProfileValidationError: If any other merged value is invalid
    """
    data, path = _merged_profile_data(overrides, require_exists=False)
    return build_pay_policy(data, path)
