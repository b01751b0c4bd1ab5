from __future__ import annotations

from typing import Any


def unwrap_data(payload: Any) -> Any:
    """Strip the backend envelope: ``{"status_code", "message", "data"}``."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def as_rows(payload: Any) -> list[Any]:
    data = unwrap_data(payload)
    if data is None:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("rows", "items", "results"):
            if isinstance(data.get(key), list):
                return data[key]
    raise ValueError(f"Expected a list payload, got {type(data).__name__}")


def as_bool(payload: Any, key: str | None = None) -> bool:
    data = unwrap_data(payload)
    if key and isinstance(data, dict):
        data = data.get(key)
    if isinstance(data, bool):
        return data
    if isinstance(data, str):
        return data.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(data)

