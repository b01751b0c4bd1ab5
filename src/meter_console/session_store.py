from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from .auth_store import AuthStore
from .authorization import AuthorizationResolver, EffectivePermissions
from .clients.auth import AuthClient
from .exceptions import (
    ApiError,
    AuthenticationFailedError,
    RefreshFailedError,
    SessionExpiredError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .logger import log_action
from .models import AuthSession, LoginCredentials, User

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    SESSION_EXPIRED = "session_expired"


class SessionStore:
    """Owns the authenticated identity for the running console.

    Token and user are always written and cleared together. Every logout bumps
    ``epoch``; a login or refresh that resolves under an older epoch is thrown
    away so it cannot bring a closed session back.
    """

    def __init__(
        self,
        http: HttpClient,
        auth_client: AuthClient | None = None,
        auth_store: AuthStore | None = None,
        *,
        on_session_expired: Callable[[SessionExpiredError], None] | None = None,
        navigate_to_login: Callable[[], None] | None = None,
        resolver: AuthorizationResolver | None = None,
    ) -> None:
        self.http = http
        self.auth_client = auth_client or AuthClient(http)
        self.auth_store = auth_store or AuthStore(app_name=http.config.app_name)
        self.on_session_expired = on_session_expired
        self.navigate_to_login = navigate_to_login
        self.resolver = resolver or AuthorizationResolver()
        self.status = SessionStatus.ANONYMOUS
        self.is_loading = True
        self.epoch = 0
        self._token: str | None = None
        self._user: User | None = None
        http.set_token_provider(lambda: self._token)
        http.register_unauthorized_handler(self._handle_unauthorized)

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED

    def effective_permissions(self) -> EffectivePermissions:
        return self.resolver.effective_permissions(self._user)

    def restore(self) -> SessionStatus:
        stored = self.auth_store.load()
        if stored is None:
            self._token, self._user = None, None
            self.status = SessionStatus.ANONYMOUS
        else:
            self._token, self._user = stored.token, stored.user
            self.status = SessionStatus.AUTHENTICATED
        self.is_loading = False
        logger.info("session_restored", extra={"status": self.status.value})
        return self.status

    async def login(self, credentials: LoginCredentials) -> AuthSession:
        epoch = self.epoch
        previous = self.status
        self.status = SessionStatus.AUTHENTICATING
        try:
            session = await self.auth_client.sign_in(credentials)
        except (UnauthorizedError, ValidationError) as exc:
            self._restore_status(epoch, previous)
            log_action(logger, "auth", "login", "failure", actor=credentials.username_or_email, code=exc.code)
            raise AuthenticationFailedError(
                code="INVALID_CREDENTIALS",
                message=exc.message or "Invalid username or password",
                details=exc.details,
                trace_id=exc.trace_id,
                status_code=exc.status_code,
                raw_payload=exc.raw_payload,
            ) from exc
        except Exception as exc:
            self._restore_status(epoch, previous)
            code = exc.code if isinstance(exc, ApiError) else type(exc).__name__
            log_action(logger, "auth", "login", "failure", actor=credentials.username_or_email, code=code)
            raise
        if epoch != self.epoch:
            logger.info("login_discarded_after_logout")
            return session
        self._commit(session.access_token, session.user)
        log_action(logger, "auth", "login", "success", actor=session.user.username)
        return session

    def logout(self) -> None:
        actor = self._user.username if self._user else None
        self.epoch += 1
        self._token, self._user = None, None
        self.status = SessionStatus.ANONYMOUS
        self.auth_store.clear()
        log_action(logger, "auth", "logout", "success", actor=actor)
        if self.navigate_to_login is not None:
            self.navigate_to_login()

    async def sign_out(self) -> None:
        if self._token:
            try:
                await self.auth_client.sign_out()
            except ApiError as exc:
                logger.warning("sign_out_request_failed", extra={"code": exc.code})
        self.logout()

    async def refresh(self) -> AuthSession:
        epoch = self.epoch
        try:
            session = await self.auth_client.refresh_token()
        except Exception as exc:
            code = exc.code if isinstance(exc, ApiError) else type(exc).__name__
            logger.warning("session_refresh_failed", extra={"code": code})
            if epoch == self.epoch:
                self.logout()
            raise RefreshFailedError(
                code="REFRESH_FAILED",
                message="Your session could not be extended",
                trace_id=getattr(exc, "trace_id", None),
                status_code=getattr(exc, "status_code", 0),
            ) from exc
        if epoch != self.epoch:
            raise RefreshFailedError(
                code="SESSION_CLOSED",
                message="The session was closed before the refresh completed",
                status_code=401,
            )
        self._commit(session.access_token, session.user)
        log_action(logger, "auth", "refresh", "success", actor=session.user.username)
        return session

    def cancel_expired_session(self) -> None:
        self.logout()

    def update_user_session(self, user: User) -> None:
        if not self._token:
            raise RuntimeError("Cannot update the user of an anonymous session")
        self._user = user
        self.auth_store.save(self._token, user)

    def _commit(self, token: str, user: User) -> None:
        self.auth_store.save(token, user)
        self._token, self._user = token, user
        self.status = SessionStatus.AUTHENTICATED

    def _restore_status(self, epoch: int, previous: SessionStatus) -> None:
        if epoch == self.epoch and self.status == SessionStatus.AUTHENTICATING:
            self.status = previous

    def _handle_unauthorized(self, error: ApiError) -> None:
        if self.status != SessionStatus.AUTHENTICATED:
            logger.debug("unauthorized_ignored", extra={"status": self.status.value})
            return
        self.status = SessionStatus.SESSION_EXPIRED
        log_action(logger, "auth", "session_expired", "prompted", actor=self._user.username if self._user else None)
        if self.on_session_expired is not None:
            self.on_session_expired(
                SessionExpiredError(
                    code=error.code,
                    message=error.message,
                    details=error.details,
                    trace_id=error.trace_id,
                    status_code=error.status_code,
                    raw_payload=error.raw_payload,
                )
            )
