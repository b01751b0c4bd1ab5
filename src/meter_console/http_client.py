from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from .config import ClientConfig, load_config
from .error_mapper import error_from_response
from .exceptions import ApiError, TransportError, UnauthorizedError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], "str | None"]
UnauthorizedHandler = Callable[[ApiError], None]

SIGN_IN_PATH = "/auth/signin"
REFRESH_TOKEN_PATH = "/auth/refresh-token"
PUBLIC_PATHS = (SIGN_IN_PATH, REFRESH_TOKEN_PATH)


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    data: Any
    url: str


class HttpClient:
    """Async gateway to the metering API.

    Injects the bearer token on every non-public call and reports each 401 on a
    protected path to the registered unauthorized handler exactly once before
    raising it. Requests are never retried.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        token_provider: TokenProvider | None = None,
    ) -> None:
        self.config = config or load_config()
        self._client = client or httpx.AsyncClient(
            base_url=self.config.api_base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
            headers={"Content-Type": "application/json"},
        )
        self._token_provider = token_provider
        self._unauthorized_handler: UnauthorizedHandler | None = None

    def set_token_provider(self, provider: TokenProvider | None) -> None:
        self._token_provider = provider

    def register_unauthorized_handler(self, handler: UnauthorizedHandler | None) -> None:
        if handler is not None and self._unauthorized_handler is not None and handler != self._unauthorized_handler:
            logger.warning("unauthorized_handler_replaced")
        self._unauthorized_handler = handler

    @staticmethod
    def is_public_path(path: str) -> bool:
        return any(marker in path for marker in PUBLIC_PATHS)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        normalized_method = method.upper()
        normalized_path = path if path.startswith("/") else f"/{path}"
        public = self.is_public_path(normalized_path)

        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        token = self._token_provider() if self._token_provider else None
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        elif not public:
            error = UnauthorizedError(
                code="NO_TOKEN",
                message="No access token available",
                status_code=401,
            )
            self._notify_unauthorized(error)
            raise error

        try:
            response = await self._client.request(
                normalized_method,
                normalized_path,
                json=json_body,
                params=_clean_params(params),
                headers=request_headers,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                code="TIMEOUT_ERROR",
                message="The API took too long to respond",
                details=str(exc),
                status_code=0,
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(
                code="NETWORK_ERROR",
                message="Network error while calling the metering API",
                details={"type": type(exc).__name__, "error": str(exc)},
                status_code=0,
            ) from exc

        if response.status_code >= 400:
            error = error_from_response(response)
            logger.info(
                "http_error",
                extra={"method": normalized_method, "path": normalized_path, "status_code": response.status_code},
            )
            if response.status_code == 401 and not public:
                self._notify_unauthorized(error)
            raise error

        return ApiResponse(
            status_code=response.status_code,
            data=_safe_json(response),
            url=str(response.request.url),
        )

    async def get(self, path: str, *, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None) -> ApiResponse:
        return await self.request("GET", path, params=params, headers=headers)

    async def post(self, path: str, body: Any = None, *, headers: dict[str, str] | None = None) -> ApiResponse:
        return await self.request("POST", path, json_body=body, headers=headers)

    async def put(self, path: str, body: Any = None, *, headers: dict[str, str] | None = None) -> ApiResponse:
        return await self.request("PUT", path, json_body=body, headers=headers)

    async def patch(self, path: str, body: Any = None, *, headers: dict[str, str] | None = None) -> ApiResponse:
        return await self.request("PATCH", path, json_body=body, headers=headers)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> ApiResponse:
        return await self.request("DELETE", path, headers=headers)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _notify_unauthorized(self, error: ApiError) -> None:
        handler = self._unauthorized_handler
        if handler is None:
            return
        try:
            handler(error)
        except Exception:
            logger.exception("unauthorized_handler_failed", extra={"code": error.code})


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    cleaned = {key: value for key, value in params.items() if value not in (None, "")}
    return cleaned or None


def _safe_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return {"message": response.text}
