from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None = None
    trace_id: str | None = None
    status_code: int = 0
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class AuthenticationFailedError(UnauthorizedError):
    """Bad credentials on sign-in. Shown inline on the login form."""


class SessionExpiredError(UnauthorizedError):
    """A 401 arrived mid-session; the user is asked to extend or leave."""


class RefreshFailedError(UnauthorizedError):
    """Silent refresh failed. The session is gone."""


class AssignmentNotFoundError(Exception):
    """No role/permission link exists for the requested pair."""

    def __init__(self, rol_id: int, permission_id: int) -> None:
        super().__init__(f"Assignment not found: rol_id={rol_id} permission_id={permission_id}")
        self.rol_id = rol_id
        self.permission_id = permission_id


@dataclass
class FetchCycleFailedError(Exception):
    period: str
    failures: Mapping[str, BaseException] = field(default_factory=dict)

    def __str__(self) -> str:
        names = ", ".join(sorted(self.failures)) or "unknown"
        return f"Report fetch failed for period {self.period}: {names}"
