"""PostgreSQL user repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from permitrack.domain.entities import User
from permitrack.domain.exceptions import ConflictError
from permitrack.domain.value_objects import Role

_COLUMNS = (
    "id, username, password_hash, email, first_name, last_name, role, regions, "
    "created_at, last_login"
)

DUPLICATE_USER = "Username or email already exists"


def _row_to_user(r: tuple) -> User:
    return User(
        id=r[0],
        username=r[1],
        password_hash=r[2],
        email=r[3],
        first_name=r[4],
        last_name=r[5],
        role=Role(r[6]),
        regions=list(r[7] or []),
        created_at=r[8],
        last_login=r[9],
    )


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: UUID) -> User | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def get_by_username(self, username: str) -> User | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE username = %s",
            (username,),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def find_conflicting(
        self, username: str | None, email: str | None, exclude_id: UUID | None = None
    ) -> User | None:
        """First user other than exclude_id sharing username or email."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user "
            "WHERE (username = %s OR email = %s) AND (%s::uuid IS NULL OR id <> %s::uuid) "
            "LIMIT 1",
            (username, email, exclude_id, exclude_id),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def list_all(self) -> list[User]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user ORDER BY created_at DESC",
        )
        rows = await cur.fetchall()
        return [_row_to_user(r) for r in rows]

    async def count(self) -> int:
        cur = await self._conn.execute("SELECT count(*) FROM app_user")
        r = await cur.fetchone()
        return r[0]

    async def create(self, user: User) -> User:
        """Create user. Duplicate username or email raises ConflictError."""
        try:
            await self._conn.execute(
                f"INSERT INTO app_user ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    user.id,
                    user.username,
                    user.password_hash,
                    user.email,
                    user.first_name,
                    user.last_name,
                    user.role.value,
                    user.regions,
                    user.created_at,
                    user.last_login,
                ),
            )
        except UniqueViolation as e:
            raise ConflictError(DUPLICATE_USER) from e
        return user

    async def update(self, user: User) -> None:
        try:
            await self._conn.execute(
                "UPDATE app_user SET username=%s, password_hash=%s, email=%s, first_name=%s, "
                "last_name=%s, role=%s, regions=%s WHERE id=%s",
                (
                    user.username,
                    user.password_hash,
                    user.email,
                    user.first_name,
                    user.last_name,
                    user.role.value,
                    user.regions,
                    user.id,
                ),
            )
        except UniqueViolation as e:
            raise ConflictError(DUPLICATE_USER) from e

    async def set_password_hash(self, user_id: UUID, password_hash: str) -> None:
        await self._conn.execute(
            "UPDATE app_user SET password_hash = %s WHERE id = %s",
            (password_hash, user_id),
        )

    async def set_last_login(self, user_id: UUID, when: datetime) -> None:
        await self._conn.execute(
            "UPDATE app_user SET last_login = %s WHERE id = %s",
            (when, user_id),
        )

    async def delete(self, user_id: UUID) -> bool:
        cur = await self._conn.execute("DELETE FROM app_user WHERE id = %s", (user_id,))
        return cur.rowcount > 0
