from __future__ import annotations

import asyncio

import httpx
import pytest

from meter_console.exceptions import ForbiddenError, NotFoundError, TransportError, UnauthorizedError
from meter_console.http_client import HttpClient


def test_bearer_token_is_injected(backend, make_http) -> None:
    backend.route("GET", "/roles/get-all-rols", payload={"data": []})
    http = make_http(token="token-123")

    response = asyncio.run(http.get("/roles/get-all-rols", params={"limit": 10, "offset": None}))

    request = backend.requests[0]
    assert response.status_code == 200
    assert response.data == {"data": []}
    assert request.headers["Authorization"] == "Bearer token-123"
    assert dict(request.url.params) == {"limit": "10"}


def test_missing_token_fails_fast_without_network(backend, make_http) -> None:
    http = make_http()
    seen = []
    http.register_unauthorized_handler(seen.append)

    with pytest.raises(UnauthorizedError) as excinfo:
        asyncio.run(http.get("/users-gateway/find-all"))

    assert excinfo.value.code == "NO_TOKEN"
    assert excinfo.value.status_code == 401
    assert backend.requests == []
    assert seen == [excinfo.value]


def test_public_paths_do_not_need_a_token(backend, make_http) -> None:
    backend.route("POST", "/auth/signin", payload={"data": {"ok": True}})
    http = make_http()

    response = asyncio.run(http.post("/auth/signin", {"username_or_email": "a", "password": "b"}))

    assert response.data == {"data": {"ok": True}}
    assert "Authorization" not in backend.requests[0].headers


def test_401_on_protected_path_notifies_handler_once(backend, make_http) -> None:
    backend.route("GET", "/permissions/get-all-permissions", 401, {"message": "jwt expired"})
    http = make_http(token="stale")
    seen = []
    http.register_unauthorized_handler(seen.append)

    with pytest.raises(UnauthorizedError) as excinfo:
        asyncio.run(http.get("/permissions/get-all-permissions"))

    assert seen == [excinfo.value]
    assert excinfo.value.message == "jwt expired"


def test_401_on_sign_in_does_not_notify_handler(backend, make_http) -> None:
    backend.route("POST", "/auth/signin", 401, {"message": "Invalid credentials"})
    http = make_http()
    seen = []
    http.register_unauthorized_handler(seen.append)

    with pytest.raises(UnauthorizedError):
        asyncio.run(http.post("/auth/signin", {"username_or_email": "a", "password": "b"}))

    assert seen == []


def test_401_on_refresh_token_does_not_notify_handler(backend, make_http) -> None:
    backend.route("POST", "/auth/refresh-token", 401, {"message": "refresh token expired"})
    http = make_http(token="t")
    seen = []
    http.register_unauthorized_handler(seen.append)

    with pytest.raises(UnauthorizedError):
        asyncio.run(http.post("/auth/refresh-token"))

    assert seen == []


def test_403_does_not_notify_handler(backend, make_http) -> None:
    backend.route("DELETE", "/roles/delete-rol/3", 403, {"message": "forbidden"})
    http = make_http(token="t")
    seen = []
    http.register_unauthorized_handler(seen.append)

    with pytest.raises(ForbiddenError):
        asyncio.run(http.delete("/roles/delete-rol/3"))

    assert seen == []


def test_handler_failure_does_not_replace_original_error(backend, make_http) -> None:
    backend.route("GET", "/roles/get-all-rols", 401, {"message": "expired"})
    http = make_http(token="t")

    def broken(_error):
        raise RuntimeError("handler bug")

    http.register_unauthorized_handler(broken)

    with pytest.raises(UnauthorizedError):
        asyncio.run(http.get("/roles/get-all-rols"))


def test_unmapped_status_is_raised(backend, make_http) -> None:
    http = make_http(token="t")

    with pytest.raises(NotFoundError):
        asyncio.run(http.get("/does-not-exist"))


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (httpx.ReadTimeout("slow"), "TIMEOUT_ERROR"),
        (httpx.ConnectError("refused"), "NETWORK_ERROR"),
    ],
)
def test_transport_failures_are_mapped(config, exc, code) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    client = httpx.AsyncClient(base_url=config.api_base_url, transport=httpx.MockTransport(handler))
    http = HttpClient(config, client=client, token_provider=lambda: "t")

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(http.get("/roles/get-all-rols"))

    assert excinfo.value.code == code
    assert excinfo.value.status_code == 0


def test_empty_body_yields_none(backend, make_http) -> None:
    backend.route("DELETE", "/rol-permission/delete-rol-permission/5", handler=lambda request: httpx.Response(204))
    http = make_http(token="t")

    response = asyncio.run(http.delete("/rol-permission/delete-rol-permission/5"))

    assert response.status_code == 204
    assert response.data is None
