from __future__ import annotations

from typing import Any

from ..models import Permission
from ..normalizers import as_bool, as_rows
from .base import BaseClient


class PermissionsClient(BaseClient):
    async def find_all(self) -> list[Permission]:
        response = await self.http.get("/permissions/get-all-permissions")
        return [Permission.model_validate(row) for row in as_rows(response.data)]

    async def find_by_id(self, permission_id: int) -> Permission:
        data = await self._get_data(f"/permissions/get-permission/{permission_id}")
        return Permission.model_validate(data)

    async def create_permission(self, payload: dict[str, Any]) -> Permission:
        data = await self._send("POST", "/permissions/create-permission", payload)
        return Permission.model_validate(data)

    async def update_permission(self, permission_id: int, changes: dict[str, Any]) -> Permission:
        data = await self._send("PUT", f"/permissions/update-permission/{permission_id}", changes)
        return Permission.model_validate(data)

    async def delete_permission(self, permission_id: int) -> bool:
        response = await self.http.delete(f"/permissions/delete-permission/{permission_id}")
        return as_bool(response.data)

    async def verify_permission_exists(self, name: str) -> bool:
        response = await self.http.get(f"/permissions/verify-permission-exists/{name}")
        return as_bool(response.data)
