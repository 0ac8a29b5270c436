"""Domain models for authentication."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents the signed-in user as returned by the backend."""

    id: UUID | None
    username: str
    job: str = ""


@dataclass(frozen=True)
class LoginResult:
    """Credentials issued by a successful login."""

    access_token: str
    user: UserRecord
