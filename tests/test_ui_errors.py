from __future__ import annotations

from meter_console.exceptions import (
    AssignmentNotFoundError,
    AuthenticationFailedError,
    FetchCycleFailedError,
    ForbiddenError,
    RefreshFailedError,
    UnauthorizedError,
)
from meter_console.ui_errors import present_error, to_user_facing_error


def test_bad_credentials_are_shown_inline() -> None:
    error = AuthenticationFailedError(code="INVALID_CREDENTIALS", message="Invalid credentials", status_code=401)

    presented = present_error(error)

    assert presented.kind == "inline"
    assert presented.message == "Invalid credentials"
    assert presented.technical_details == "INVALID_CREDENTIALS (HTTP 401)"


def test_session_errors_route_to_modal_or_logout() -> None:
    expired = present_error(UnauthorizedError(code="HTTP_ERROR", message="jwt expired", status_code=401))
    refresh = present_error(RefreshFailedError(code="REFRESH_FAILED", message="gone", status_code=401))

    assert expired.kind == "modal"
    assert refresh.kind == "logout"


def test_domain_errors() -> None:
    missing = present_error(AssignmentNotFoundError(2, 11))
    fetch = present_error(FetchCycleFailedError(period="2026-02", failures={"global_stats": RuntimeError("x")}))

    assert missing.kind == "inline"
    assert "rol_id=2" in missing.details
    assert fetch.kind == "logged"
    assert "global_stats" in fetch.details


def test_api_error_keeps_trace_id() -> None:
    error = ForbiddenError(code="FORBIDDEN", message="  ", details="role lacks users.edit", trace_id="tr-1", status_code=403)

    presented = to_user_facing_error(error)

    assert presented.message == "Request failed"
    assert presented.details == "FORBIDDEN (HTTP 403): role lacks users.edit"
    assert presented.trace_id == "tr-1"


def test_unexpected_errors_are_described() -> None:
    presented = present_error(KeyError("boom"))

    assert presented.kind == "inline"
    assert presented.details.startswith("KeyError")
