from __future__ import annotations

from ..http_client import REFRESH_TOKEN_PATH, SIGN_IN_PATH
from ..models import AuthSession, LoginCredentials
from .base import BaseClient


class AuthClient(BaseClient):
    async def sign_in(self, credentials: LoginCredentials) -> AuthSession:
        data = await self._send("POST", SIGN_IN_PATH, credentials.model_dump())
        return AuthSession.model_validate(data)

    async def sign_out(self) -> None:
        await self._send("POST", "/auth/signout")

    async def refresh_token(self) -> AuthSession:
        # the refresh token travels as an http-only cookie held by the client
        data = await self._send("POST", REFRESH_TOKEN_PATH)
        return AuthSession.model_validate(data)
