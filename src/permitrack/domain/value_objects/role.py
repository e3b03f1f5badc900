"""User roles."""

from enum import StrEnum


class Role(StrEnum):
    """Roles a user can hold."""

    ADMIN = "admin"
    MANAGER = "manager"
    SECURITY_OFFICER = "security_officer"
    OBSERVER = "observer"

    @property
    def bypasses_region_scope(self) -> bool:
        """Admins and managers act on every region."""
        return self in (Role.ADMIN, Role.MANAGER)
