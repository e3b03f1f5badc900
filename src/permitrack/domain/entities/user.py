"""User entity - an actor holding a role and a set of regions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from permitrack.domain.value_objects import Role


@dataclass
class User:
    """User with credentials, role and assigned regions."""

    id: UUID
    username: str
    password_hash: str
    email: str
    first_name: str
    last_name: str
    role: Role
    created_at: datetime
    regions: list[str] = field(default_factory=list)
    last_login: datetime | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def closer_label(self) -> str:
        """Snapshot stored on a permit when this user closes it."""
        return f"{self.first_name} {self.last_name} [{self.username}]"

    def can_access_region(self, region: str) -> bool:
        """Region scoping: admins and managers see all, others only their regions."""
        if self.role.bypasses_region_scope:
            return True
        return region in self.regions
