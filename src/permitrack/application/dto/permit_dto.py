"""Permit DTOs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from permitrack.domain.entities import Material
from permitrack.domain.value_objects import RequestType


@dataclass
class PermitCreateInput:
    """Input for creating a permit."""

    permit_number: str
    date: date
    region: str
    location: str
    carrier_name: str
    carrier_id: str
    request_type: RequestType
    vehicle_plate: str
    materials: list[Material] = field(default_factory=list)


@dataclass
class PermitUpdateInput:
    """Partial update - None means keep the current value."""

    permit_number: str | None = None
    date: date | None = None
    region: str | None = None
    location: str | None = None
    carrier_name: str | None = None
    carrier_id: str | None = None
    request_type: RequestType | None = None
    vehicle_plate: str | None = None
    materials: list[Material] | None = None


@dataclass
class PermitFilter:
    """Listing filters. regions restricts results to those regions when set."""

    region: str | None = None
    date: date | None = None
    search: str | None = None
    regions: list[str] | None = None
