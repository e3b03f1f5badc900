"""Domain entities."""

from permitrack.domain.entities.activity_log import ActivityLogEntry
from permitrack.domain.entities.permit import Material, Permit
from permitrack.domain.entities.role_permissions import RolePermissions
from permitrack.domain.entities.user import User

__all__ = [
    "ActivityLogEntry",
    "Material",
    "Permit",
    "RolePermissions",
    "User",
]
