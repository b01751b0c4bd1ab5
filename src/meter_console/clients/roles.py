from __future__ import annotations

from typing import Any

from ..models import Role
from ..normalizers import as_rows
from .base import BaseClient


class RolesClient(BaseClient):
    async def find_all(self, limit: int = 100, offset: int = 0) -> list[Role]:
        response = await self.http.get("/roles/get-all-rols", params={"limit": limit, "offset": offset})
        return [Role.model_validate(row) for row in as_rows(response.data)]

    async def find_by_id(self, rol_id: int) -> Role:
        data = await self._get_data(f"/roles/get-rol-by-id/{rol_id}")
        return Role.model_validate(data)

    async def create_role(self, name: str, description: str = "", is_active: bool = True) -> Role:
        payload = {"name": name, "description": description, "isActive": is_active}
        data = await self._send("POST", "/roles/create-rol", payload)
        return Role.model_validate(data)

    async def update_role(self, rol_id: int, changes: dict[str, Any]) -> Role:
        data = await self._send("PUT", f"/roles/update-rol/{rol_id}", changes)
        return Role.model_validate(data)
