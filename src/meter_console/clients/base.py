from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient
from ..normalizers import unwrap_data


@dataclass
class BaseClient:
    http: HttpClient

    async def _get_data(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        response = await self.http.get(path, params=params)
        return unwrap_data(response.data)

    async def _send(self, method: str, path: str, body: Any = None) -> Any:
        response = await self.http.request(method, path, json_body=body)
        return unwrap_data(response.data)
