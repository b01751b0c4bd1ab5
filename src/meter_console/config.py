from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv

DEFAULT_REPORT_TIMEZONE = "America/Guayaquil"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float = 15.0
    verify_ssl: bool = True
    report_timezone: str = DEFAULT_REPORT_TIMEZONE
    debounce_seconds: float = 0.5
    poll_interval_seconds: float = 5.0
    app_name: str = "meter-console"

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("METER_CONSOLE_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"METER_CONSOLE_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("METER_CONSOLE_API_BASE_URL") or "").strip()
    )

    timeout_seconds = _read_float("METER_CONSOLE_TIMEOUT_SECONDS", "15")
    _validate(
        timeout_seconds > 0,
        f"Invalid METER_CONSOLE_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    debounce_ms = _read_int("METER_CONSOLE_DEBOUNCE_MS", "500")
    _validate(debounce_ms >= 0, f"Invalid METER_CONSOLE_DEBOUNCE_MS: expected >= 0, got {debounce_ms}")

    poll_interval_ms = _read_int("METER_CONSOLE_POLL_INTERVAL_MS", "5000")
    _validate(
        poll_interval_ms > 0,
        f"Invalid METER_CONSOLE_POLL_INTERVAL_MS: expected > 0, got {poll_interval_ms}",
    )

    report_timezone = (os.getenv("METER_CONSOLE_REPORT_TIMEZONE") or DEFAULT_REPORT_TIMEZONE).strip()
    verify_ssl = _coerce_bool(os.getenv("METER_CONSOLE_VERIFY_SSL"), True)
    app_name = (os.getenv("METER_CONSOLE_APP_NAME") or "meter-console").strip()

    values = {"METER_CONSOLE_API_BASE_URL": api_base_url}
    _require(values, ["METER_CONSOLE_API_BASE_URL"])

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        verify_ssl=verify_ssl,
        report_timezone=report_timezone,
        debounce_seconds=debounce_ms / 1000,
        poll_interval_seconds=poll_interval_ms / 1000,
        app_name=app_name,
    )
