from __future__ import annotations

from typing import Mapping

import httpx

from .exceptions import (
    ApiError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

TRACE_HEADERS = ("X-Trace-ID", "X-Trace-Id", "X-Request-ID")

_STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or payload.get("error") or "HTTP_ERROR")
    message = _message_from(payload.get("message")) or "Request failed"
    details = payload.get("details")
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped = _STATUS_ERRORS.get(status_code) or (ServerError if status_code >= 500 else ApiError)
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )


def error_from_response(response: httpx.Response) -> ApiError:
    trace_id = next((response.headers[key] for key in TRACE_HEADERS if response.headers.get(key)), None)
    try:
        payload = response.json()
    except ValueError:
        payload = {"message": response.text}
    if not isinstance(payload, dict):
        payload = {"message": response.text, "details": payload}
    return map_error(response.status_code, payload, trace_id)


def _message_from(value: object) -> str:
    # validation failures arrive as a list of messages
    if isinstance(value, list):
        return "; ".join(str(item) for item in value if item)
    if value is None:
        return ""
    return str(value).strip()
