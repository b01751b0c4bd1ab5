from __future__ import annotations

from typing import Any

from ..models import ChangePasswordRequest, User
from ..normalizers import as_bool, as_rows
from .base import BaseClient


class UsersClient(BaseClient):
    async def find_all(self, limit: int = 100, offset: int = 0) -> list[User]:
        response = await self.http.get("/users-gateway/find-all", params={"limit": limit, "offset": offset})
        return [User.model_validate(row) for row in as_rows(response.data)]

    async def find_by_id(self, user_id: str) -> User:
        data = await self._get_data(f"/users-gateway/find-by-id/{user_id}")
        return User.model_validate(data)

    async def get_profile(self, username_or_email: str) -> User:
        data = await self._get_data(f"/users-gateway/get-profile/{username_or_email}")
        return User.model_validate(data)

    async def exists_by_username(self, username: str) -> bool:
        response = await self.http.get(f"/users-gateway/exists-by-username/{username}")
        return as_bool(response.data, "exists")

    async def exists_by_email(self, email: str) -> bool:
        response = await self.http.get(f"/users-gateway/exists-by-email/{email}")
        return as_bool(response.data, "exists")

    async def create_user(self, payload: dict[str, Any]) -> User:
        data = await self._send("POST", "/users-gateway/create-user", payload)
        return User.model_validate(data)

    async def update_user(self, user_id: str, updates: dict[str, Any]) -> User:
        data = await self._send("PUT", f"/users-gateway/update-user/{user_id}", updates)
        return User.model_validate(data)

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> None:
        await self._send("PUT", f"/users-gateway/update-password/{user_id}", request.to_wire())

    async def delete_user(self, user_id: str) -> None:
        await self._send("DELETE", f"/users-gateway/soft-delete/{user_id}")

    async def restore_user(self, user_id: str) -> User:
        data = await self._send("PUT", f"/users-gateway/restore/{user_id}")
        return User.model_validate(data)

    async def reset_failed_attempts(self, user_id: str) -> None:
        await self._send("PUT", f"/users-gateway/reset-failed-attempts/{user_id}")
