"""User repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from permitrack.domain.entities import User


class UserRepository(Protocol):
    """Port for user (credential store) persistence."""

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_username(self, username: str) -> User | None: ...

    async def find_conflicting(
        self, username: str | None, email: str | None, exclude_id: UUID | None = None
    ) -> User | None: ...

    async def list_all(self) -> list[User]: ...

    async def count(self) -> int: ...

    async def create(self, user: User) -> User: ...

    async def update(self, user: User) -> None: ...

    async def set_password_hash(self, user_id: UUID, password_hash: str) -> None: ...

    async def set_last_login(self, user_id: UUID, when: datetime) -> None: ...

    async def delete(self, user_id: UUID) -> bool: ...
