"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from permitrack.application.ports.repositories import (
    ActivityLogRepository,
    PermitRepository,
    RolePermissionsRepository,
    StatisticsRepository,
    UserRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def users(self) -> UserRepository: ...

    @property
    def permits(self) -> PermitRepository: ...

    @property
    def role_permissions(self) -> RolePermissionsRepository: ...

    @property
    def activity_logs(self) -> ActivityLogRepository: ...

    @property
    def statistics(self) -> StatisticsRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
