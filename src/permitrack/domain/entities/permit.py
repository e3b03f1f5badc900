"""Permit entity and the materials it owns."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from uuid import UUID

from permitrack.domain.value_objects import PermitState, RequestType

NOT_APPLICABLE = "N/A"


@dataclass
class Material:
    """Material carried under a permit."""

    id: str
    description: str
    serial_number: str


def vehicle_only_materials() -> list[Material]:
    """Single placeholder entry recorded for vehicle-only requests."""
    return [Material(id="1", description=NOT_APPLICABLE, serial_number=NOT_APPLICABLE)]


@dataclass
class Permit:
    """Permit - authorizes movement of materials or a vehicle at a region.

    closed_by and closed_at are set together on close and cleared together
    on reopen. closed_by_name is a snapshot taken at close time so it
    survives deletion of the closing user.
    """

    id: UUID
    permit_number: str
    date: date
    region: str
    location: str
    carrier_name: str
    carrier_id: str
    request_type: RequestType
    vehicle_plate: str
    created_at: datetime
    created_by: UUID | None = None
    materials: list[Material] = field(default_factory=list)
    closed_by: UUID | None = None
    closed_at: datetime | None = None
    closed_by_name: str | None = None
    can_reopen: bool = True

    @property
    def state(self) -> PermitState:
        return PermitState.CLOSED if self.closed_at is not None else PermitState.OPEN

    @property
    def is_closed(self) -> bool:
        return self.state is PermitState.CLOSED

    def closed_by_within(self, user_id: UUID, now: datetime, window: timedelta) -> bool:
        """True if user_id closed this permit less than window ago."""
        if not self.is_closed or self.closed_by != user_id:
            return False
        return now - self.closed_at < window
