from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError

from .models import User

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


@dataclass(frozen=True)
class StoredSession:
    token: str
    user: User


@dataclass
class AuthStore:
    """Persists the ``token`` and ``user`` pair in one file.

    Both keys are written by a single atomic replace and read in one pass, so a
    reader never sees one without the other.
    """

    app_name: str = "meter-console"
    filename: str = "session.json"
    directory: Path | None = None

    def _path(self) -> Path:
        base = self.directory or Path(user_data_dir(self.app_name, appauthor=False))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save(self, token: str, user: User) -> None:
        if not token:
            raise ValueError("Refusing to persist a session without a token")
        path = self._path()
        data = {TOKEN_KEY: token, USER_KEY: user.model_dump(by_alias=True, mode="json")}
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        try:
            tmp_path.chmod(0o600)
        except OSError:
            logger.debug("session_file_chmod_unsupported")
        os.replace(tmp_path, path)

    def load(self) -> StoredSession | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            logger.warning("session_file_unreadable")
            self.clear()
            return None
        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        raw_user = data.get(USER_KEY) if isinstance(data, dict) else None
        if not token or not raw_user:
            self.clear()
            return None
        try:
            user = User.model_validate(raw_user)
        except ValidationError:
            logger.warning("session_user_invalid")
            self.clear()
            return None
        return StoredSession(token=str(token), user=user)

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()
