"""Persistent storage for the session token and signed-in user."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ValidationError

from mimix_admin.adapters.api_models import UserPayload
from mimix_admin.domain.auth import UserRecord

_logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """Interface for persisted client credentials."""

    def get_token(self) -> str | None:
        """Return the stored access token, if any."""

    def get_user(self) -> UserRecord | None:
        """Return the stored user, if any."""

    def save(self, token: str, user: UserRecord) -> None:
        """Persist the token and user together."""

    def clear(self) -> None:
        """Remove all stored state."""


class _StoredCredentials(BaseModel):
    token: str | None = None
    user: UserPayload | None = None


@dataclass
class JsonFileCredentialStore(CredentialStore):
    """Credential store backed by a JSON file."""

    path: Path

    @classmethod
    def create(cls, raw_path: str) -> "JsonFileCredentialStore":
        """Create a store for a user-supplied path (``~`` is expanded)."""
        return cls(path=Path(raw_path).expanduser())

    def get_token(self) -> str | None:
        """Return the stored access token, if any."""
        return self._load().token or None

    def get_user(self) -> UserRecord | None:
        """Return the stored user, if any."""
        user = self._load().user
        return user.to_domain() if user else None

    def save(self, token: str, user: UserRecord) -> None:
        """Persist the token and user together."""
        stored = _StoredCredentials(
            token=token,
            user=UserPayload(id=user.id, username=user.username, job=user.job),
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(stored.model_dump_json(), encoding="utf-8")

    def clear(self) -> None:
        """Remove all stored state."""
        self.path.unlink(missing_ok=True)

    def _load(self) -> _StoredCredentials:
        if not self.path.exists():
            return _StoredCredentials()
        try:
            return _StoredCredentials.model_validate_json(
                self.path.read_text(encoding="utf-8")
            )
        except ValidationError:
            _logger.warning("Ignoring unreadable credentials file: %s", self.path)
            return _StoredCredentials()
