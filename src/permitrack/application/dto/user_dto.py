"""User and authentication DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from permitrack.domain.entities import User
from permitrack.domain.value_objects import Role


@dataclass
class UserCreateInput:
    """Input for registering or creating a user."""

    username: str
    password: str
    email: str
    first_name: str
    last_name: str
    role: Role = Role.OBSERVER
    regions: list[str] | None = None


@dataclass
class UserUpdateInput:
    """Partial user update - None means keep the current value."""

    username: str | None = None
    password: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: Role | None = None
    regions: list[str] | None = None


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a bearer token."""

    user_id: UUID
    username: str
    role: str
    expires_at: datetime


@dataclass
class LoginResult:
    """Issued token and the user it was issued for."""

    token: str
    user: User
