"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from permitrack.domain.exceptions import InternalError
from permitrack.infrastructure.persistence.postgres.activity_log_repository import (
    PostgresActivityLogRepository,
)
from permitrack.infrastructure.persistence.postgres.permit_repository import (
    PostgresPermitRepository,
)
from permitrack.infrastructure.persistence.postgres.role_permissions_repository import (
    PostgresRolePermissionsRepository,
)
from permitrack.infrastructure.persistence.postgres.statistics_repository import (
    PostgresStatisticsRepository,
)
from permitrack.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: psycopg.AsyncConnection | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = PostgresUserRepository(self._conn)
        self._permits = PostgresPermitRepository(self._conn)
        self._role_permissions = PostgresRolePermissionsRepository(self._conn)
        self._activity_logs = PostgresActivityLogRepository(self._conn)
        self._statistics = PostgresStatisticsRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def permits(self) -> PostgresPermitRepository:
        return self._permits

    @property
    def role_permissions(self) -> PostgresRolePermissionsRepository:
        return self._role_permissions

    @property
    def activity_logs(self) -> PostgresActivityLogRepository:
        return self._activity_logs

    @property
    def statistics(self) -> PostgresStatisticsRepository:
        return self._statistics

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Driver errors leaving the block surface as InternalError; domain errors
    raised by repositories pass through unchanged. Either way the
    transaction is rolled back, including on cancellation.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            uow = PostgresUnitOfWork(pool)
            async with uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as e:
            raise InternalError("Database error") from e

    return factory
