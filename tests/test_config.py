from __future__ import annotations

import pytest

from meter_console.config import DEFAULT_REPORT_TIMEZONE, ConfigError, load_config

_KEYS = [
    "METER_CONSOLE_ENV",
    "METER_CONSOLE_API_BASE_URL",
    "METER_CONSOLE_API_BASE_URL_STAGING",
    "METER_CONSOLE_TIMEOUT_SECONDS",
    "METER_CONSOLE_VERIFY_SSL",
    "METER_CONSOLE_REPORT_TIMEZONE",
    "METER_CONSOLE_DEBOUNCE_MS",
    "METER_CONSOLE_POLL_INTERVAL_MS",
    "METER_CONSOLE_APP_NAME",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # set then delete so monkeypatch also undoes anything load_dotenv writes
    for key in _KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_config_defaults(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("METER_CONSOLE_API_BASE_URL", "https://api.example.com/")

    config = load_config(str(tmp_path / "missing.env"))

    assert config.env_name == "dev"
    assert config.api_base_url == "https://api.example.com"
    assert config.timeout_seconds == 15.0
    assert config.verify_ssl is True
    assert config.report_timezone == DEFAULT_REPORT_TIMEZONE
    assert config.debounce_seconds == 0.5
    assert config.poll_interval_seconds == 5.0
    assert config.app_name == "meter-console"


def test_env_specific_base_url_wins(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("METER_CONSOLE_ENV", "staging")
    monkeypatch.setenv("METER_CONSOLE_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("METER_CONSOLE_API_BASE_URL_STAGING", "https://staging.example.com")

    config = load_config(str(tmp_path / "missing.env"))

    assert config.normalized_env == "staging"
    assert config.api_base_url == "https://staging.example.com"


def test_intervals_are_read_in_milliseconds(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("METER_CONSOLE_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("METER_CONSOLE_DEBOUNCE_MS", "250")
    monkeypatch.setenv("METER_CONSOLE_POLL_INTERVAL_MS", "10000")
    monkeypatch.setenv("METER_CONSOLE_VERIFY_SSL", "false")

    config = load_config(str(tmp_path / "missing.env"))

    assert config.debounce_seconds == 0.25
    assert config.poll_interval_seconds == 10.0
    assert config.verify_ssl is False


def test_values_from_env_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("METER_CONSOLE_API_BASE_URL=https://from-file.example.com\nMETER_CONSOLE_APP_NAME=console-qa\n")

    config = load_config(str(env_file))

    assert config.api_base_url == "https://from-file.example.com"
    assert config.app_name == "console-qa"


def test_missing_base_url_is_rejected(tmp_path) -> None:
    with pytest.raises(ConfigError, match="METER_CONSOLE_API_BASE_URL"):
        load_config(str(tmp_path / "missing.env"))


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("METER_CONSOLE_TIMEOUT_SECONDS", "0"),
        ("METER_CONSOLE_TIMEOUT_SECONDS", "soon"),
        ("METER_CONSOLE_POLL_INTERVAL_MS", "0"),
        ("METER_CONSOLE_DEBOUNCE_MS", "-1"),
    ],
)
def test_invalid_values_raise_config_error(monkeypatch, tmp_path, key, value) -> None:
    monkeypatch.setenv("METER_CONSOLE_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "missing.env"))
