"""Tests for settings.json and profile.yaml handling."""

import pytest
import yaml

from shiftpay.sdk import config
from shiftpay.sdk.schemas import FilingStatus, PayPeriodType


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SHIFTPAY_CONFIG_PATH", str(tmp_path))
    return tmp_path


def write_profile(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


class TestConfigDir:

    def test_env_var_wins(self, config_dir):
        assert config.get_config_dir() == config_dir
        assert config.get_settings_path() == config_dir / "settings.json"

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SHIFTPAY_CONFIG_PATH")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        assert config.get_config_dir() == tmp_path / "xdg" / "shiftpay"


class TestSettings:

    def test_missing_file_is_empty(self):
        assert config.load_settings() == {}

    def test_set_and_get(self, config_dir):
        path = config.set_setting("profile", "/tmp/elsewhere.yaml")

        assert path == config_dir / "settings.json"
        assert config.get_setting("profile") == "/tmp/elsewhere.yaml"
        assert config.get_setting("missing", "fallback") == "fallback"


class TestProfilePath:

    def test_defaults_to_config_dir(self, config_dir):
        assert config.get_profile_path() == config_dir / "profile.yaml"

    def test_settings_redirect(self, tmp_path):
        custom = write_profile(tmp_path / "other" / "mine.yaml", {"hourly_rate": 30})
        config.set_setting("profile", str(custom))

        assert config.get_profile_path(require_exists=True) == custom
        assert config.load_pay_profile().hourly_rate == 30

    def test_missing_profile_raises(self):
        with pytest.raises(config.ProfileNotFoundError):
            config.get_profile_path(require_exists=True)

    def test_missing_redirect_target_raises(self, tmp_path):
        config.set_setting("profile", str(tmp_path / "gone.yaml"))

        with pytest.raises(config.ProfileNotFoundError, match="configured path"):
            config.load_profile(require_exists=True)


class TestProfileValues:

    def test_set_creates_file(self, config_dir):
        path = config.set_profile_value("hourly_rate", 25)

        assert path == config_dir / "profile.yaml"
        assert config.get_profile_value("hourly_rate") == 25

    def test_none_removes_key(self):
        config.set_profile_value("state", "MT")
        config.set_profile_value("state", None)

        assert "state" not in config.load_profile()

    def test_unknown_key_rejected(self):
        with pytest.raises(KeyError):
            config.set_profile_value("hourly_wage", 25)

    def test_missing_profile_is_empty_when_optional(self):
        assert config.load_profile(require_exists=False) == {}


class TestLoadPayProfile:

    def test_defaults_fill_missing_keys(self, config_dir):
        write_profile(config_dir / "profile.yaml", {"hourly_rate": 22.5, "state": "mt"})

        profile = config.load_pay_profile()

        assert profile.hourly_rate == 22.5
        assert profile.state == "MT"
        assert profile.overtime_multiplier == 1.5
        assert profile.pay_period_type == PayPeriodType.MONTHLY
        assert profile.pay_period_end_day == 10
        assert profile.filing_status == FilingStatus.SINGLE
        assert profile.rounding_interval == 5

    def test_overrides_replace_profile_values(self, config_dir):
        write_profile(config_dir / "profile.yaml", {"hourly_rate": 22.5})

        profile = config.load_pay_profile(overrides={"hourly_rate": 40, "state": None})

        assert profile.hourly_rate == 40
        assert profile.state is None

    def test_overrides_without_profile(self):
        profile = config.load_pay_profile(overrides={"hourly_rate": 18}, require_exists=False)
        assert profile.hourly_rate == 18

    def test_invalid_values_listed(self, config_dir):
        write_profile(config_dir / "profile.yaml", {"hourly_rate": 0, "pay_period_end_day": 40})

        with pytest.raises(config.ProfileValidationError) as exc_info:
            config.load_pay_profile()

        fields = [error.split(":")[0] for error in exc_info.value.errors]
        assert sorted(fields) == ["hourly_rate", "pay_period_end_day"]
        assert exc_info.value.path == config_dir / "profile.yaml"

    def test_unknown_profile_key_is_invalid(self, config_dir):
        write_profile(config_dir / "profile.yaml", {"hourly_rate": 20, "hourly_wage": 20})

        with pytest.raises(config.ProfileValidationError, match="hourly_wage"):
            config.load_pay_profile()


class TestLoadPayPolicy:

    def test_no_rate_needed(self, config_dir):
        write_profile(config_dir / "profile.yaml", {"pay_period_type": "weekly", "state": "tx"})

        policy = config.load_pay_policy()

        assert policy.pay_period_type == PayPeriodType.WEEKLY
        assert policy.state == "TX"

    def test_missing_profile_uses_defaults(self):
        policy = config.load_pay_policy(overrides={"pay_period_end_day": 15, "state": None})

        assert policy.pay_period_type == PayPeriodType.MONTHLY
        assert policy.pay_period_end_day == 15

    def test_rejects_values_load_pay_profile_rejects(self, config_dir):
        write_profile(config_dir / "profile.yaml", {"hourly_rate": 20, "pay_period_type": "Weekly"})

        with pytest.raises(config.ProfileValidationError, match="pay_period_type"):
            config.load_pay_policy()
        with pytest.raises(config.ProfileValidationError, match="pay_period_type"):
            config.load_pay_profile()
