from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_SENSITIVE_KEYS = {"password", "token", "access_token", "refresh_token", "authorization"}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    *,
    actor: str | None = None,
    **fields: Any,
) -> None:
    illegal = sorted(key for key in fields if key.lower() in _SENSITIVE_KEYS)
    if illegal:
        raise ValueError(f"Sensitive keys are not allowed in action logs: {illegal}")
    logger.info(
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": "INFO",
                "module": module,
                "action": action,
                "actor": actor,
                "outcome": outcome,
                **fields,
            },
            default=str,
        )
    )
