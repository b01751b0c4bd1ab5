from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from meter_console.config import ClientConfig
from meter_console.http_client import HttpClient

API_BASE = "http://api.test"

Route = Callable[[httpx.Request], Any]


class FakeBackend:
    """MockTransport handler keyed by (method, path)."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def route(self, method: str, path: str, status_code: int = 200, payload: Any = None, handler: Route | None = None) -> None:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, json=payload)

        self.routes[(method.upper(), path)] = handler

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]

    def __call__(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"code": "NOT_FOUND", "message": f"no route {request.url.path}"})
        return handler(request)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=API_BASE, debounce_seconds=0.01, poll_interval_seconds=60)


@pytest.fixture
def make_http(backend: FakeBackend, config: ClientConfig) -> Callable[..., HttpClient]:
    def factory(token: str | None = None) -> HttpClient:
        client = httpx.AsyncClient(base_url=API_BASE, transport=httpx.MockTransport(backend))
        return HttpClient(config, client=client, token_provider=(lambda: token) if token else None)

    return factory


@pytest.fixture
def user_payload() -> Callable[..., dict[str, Any]]:
    return _user_payload


def _user_payload(username: str = "alice", **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "userId": "u-1",
        "username": username,
        "email": f"{username}@example.com",
        "roles": [
            {
                "rolId": 2,
                "name": "Operator",
                "permissions": [
                    {"permissionId": 10, "permissionName": "readings.view"},
                    {"permissionId": 11, "permissionName": "reports.view"},
                ],
            }
        ],
        "permissions": [{"permissionId": 10, "permissionName": "readings.view"}],
    }
    payload.update(overrides)
    return payload
