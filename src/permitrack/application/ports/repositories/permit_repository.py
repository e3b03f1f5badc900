"""Permit repository port."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from permitrack.application.dto.permit_dto import PermitFilter
from permitrack.domain.entities import Permit


class PermitRepository(Protocol):
    """Port for permit persistence, materials included.

    The conditional writes (update_if_open, close_if_open, reopen_if_closed_at)
    return None when the row is missing or no longer in the expected state;
    they are the sole arbiter between concurrent transitions.
    """

    async def get_by_id(self, permit_id: UUID) -> Permit | None: ...

    async def list(self, permit_filter: PermitFilter) -> list[Permit]: ...

    async def create(self, permit: Permit) -> Permit: ...

    async def update_if_open(self, permit: Permit) -> Permit | None: ...

    async def close_if_open(
        self, permit_id: UUID, closed_by: UUID, closed_by_name: str, closed_at: datetime
    ) -> Permit | None: ...

    async def reopen_if_closed_at(self, permit_id: UUID, closed_at: datetime) -> Permit | None: ...

    async def delete(self, permit_id: UUID) -> bool: ...
