"""Activity log repository port."""

from typing import Protocol

from permitrack.application.dto.activity_dto import ActivityQuery
from permitrack.domain.entities import ActivityLogEntry


class ActivityLogRepository(Protocol):
    """Port for the append-only activity log."""

    async def append(self, entry: ActivityLogEntry) -> None: ...

    async def search(self, query: ActivityQuery) -> tuple[list[ActivityLogEntry], int]: ...

    async def list_actions(self) -> list[str]: ...
