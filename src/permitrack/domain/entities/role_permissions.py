"""Role permissions override entity."""

from dataclasses import dataclass
from datetime import datetime

from permitrack.domain.value_objects import Role


@dataclass
class RolePermissions:
    """Per-deployment capability map for a role, replacing the defaults in full."""

    role: Role
    capabilities: dict[str, bool]
    updated_at: datetime | None = None
