from __future__ import annotations

from ..models import RolePermissionLink
from ..normalizers import as_rows
from .base import BaseClient


class RolePermissionsClient(BaseClient):
    """Join-table endpoints. The backend offers no filter and no delete-by-pair."""

    async def list_links(self) -> list[RolePermissionLink]:
        response = await self.http.get("/rol-permission/get-all-rol-permissions")
        return [RolePermissionLink.model_validate(row) for row in as_rows(response.data)]

    async def create_link(self, rol_id: int, permission_id: int) -> None:
        await self._send(
            "POST",
            "/rol-permission/create-rol-permission",
            {"rolId": int(rol_id), "permissionId": int(permission_id)},
        )

    async def delete_link(self, link_id: int) -> None:
        await self._send("DELETE", f"/rol-permission/delete-rol-permission/{link_id}")
