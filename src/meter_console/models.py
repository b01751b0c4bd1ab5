from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Backend payloads are camelCase; attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Permission(WireModel):
    permission_id: int
    permission_name: str | None = None
    permission_description: str | None = None
    category_id: int | None = None
    is_active: bool | None = None

    @property
    def is_hydrated(self) -> bool:
        return bool(self.permission_name)


class Role(WireModel):
    rol_id: int
    name: str = ""
    description: str = ""
    is_active: bool = True
    parent_rol_id: int | None = None
    permissions: Optional[List[Permission]] = None


class User(WireModel):
    user_id: str
    username: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    roles: List[Role] = Field(default_factory=list)
    permissions: List[Permission] = Field(default_factory=list)
    is_active: bool | None = None
    failed_attempts: int | None = None
    two_factor_enabled: bool | None = None


class RolePermissionLink(WireModel):
    id: int
    rol_id: int
    permission_id: int
    permission: Permission | None = None


class AuthSession(WireModel):
    access_token: str
    refresh_token: str | None = None
    user: User


class LoginCredentials(BaseModel):
    username_or_email: str
    password: str


class ChangePasswordRequest(WireModel):
    current_password: str
    new_password: str
