from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .exceptions import (
    ApiError,
    AssignmentNotFoundError,
    AuthenticationFailedError,
    FetchCycleFailedError,
    RefreshFailedError,
    UnauthorizedError,
)

ErrorKind = Literal["inline", "modal", "logout", "logged"]


@dataclass(frozen=True)
class UserFacingError:
    kind: ErrorKind
    message: str
    details: str | None = None
    trace_id: str | None = None

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def to_user_facing_error(exc: ApiError) -> UserFacingError:
    primary = exc.message.strip() or "Request failed"
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(kind="inline", message=primary, details=details, trace_id=exc.trace_id)


def present_error(exc: BaseException) -> UserFacingError:
    """Decide how the console surfaces an error to the operator."""
    if isinstance(exc, AuthenticationFailedError):
        return to_user_facing_error(exc)
    if isinstance(exc, RefreshFailedError):
        return UserFacingError(
            kind="logout",
            message="Your session has ended. Please sign in again.",
            details=f"{exc.code} (HTTP {exc.status_code})",
            trace_id=exc.trace_id,
        )
    if isinstance(exc, UnauthorizedError):
        return UserFacingError(
            kind="modal",
            message="Your session has expired. Extend it or sign out.",
            details=f"{exc.code} (HTTP {exc.status_code})",
            trace_id=exc.trace_id,
        )
    if isinstance(exc, AssignmentNotFoundError):
        return UserFacingError(kind="inline", message="That permission is not assigned to this role.", details=str(exc))
    if isinstance(exc, FetchCycleFailedError):
        return UserFacingError(kind="logged", message="Reports could not be refreshed.", details=str(exc))
    if isinstance(exc, ApiError):
        return to_user_facing_error(exc)
    return UserFacingError(kind="inline", message="Unexpected error", details=f"{type(exc).__name__}: {exc}")
