from __future__ import annotations

import json
import logging

import pytest

from meter_console.logger import get_logger, log_action


def test_log_action_writes_json_line(caplog) -> None:
    logger = logging.getLogger("meter_console.tests.audit")
    caplog.set_level(logging.INFO, logger="meter_console.tests.audit")

    log_action(logger, "roles", "assign_permission", "success", actor="admin", rol_id=2, permission_id=10)

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["module"] == "roles"
    assert payload["action"] == "assign_permission"
    assert payload["outcome"] == "success"
    assert payload["actor"] == "admin"
    assert payload["rol_id"] == 2


def test_log_action_rejects_sensitive_fields() -> None:
    with pytest.raises(ValueError):
        log_action(logging.getLogger("meter_console.tests.audit"), "auth", "login", "success", password="secret")


def test_get_logger_configures_handler_once() -> None:
    first = get_logger("meter_console.tests.configured")
    second = get_logger("meter_console.tests.configured")

    assert first is second
    assert len(second.handlers) == 1
