"""Repository ports."""

from permitrack.application.ports.repositories.activity_log_repository import (
    ActivityLogRepository,
)
from permitrack.application.ports.repositories.permit_repository import PermitRepository
from permitrack.application.ports.repositories.role_permissions_repository import (
    RolePermissionsRepository,
)
from permitrack.application.ports.repositories.statistics_repository import (
    StatisticsRepository,
)
from permitrack.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "ActivityLogRepository",
    "PermitRepository",
    "RolePermissionsRepository",
    "StatisticsRepository",
    "UserRepository",
]
