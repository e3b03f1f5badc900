"""Application ports - interfaces for external adapters."""

from permitrack.application.ports.capability_resolver import CapabilityResolver
from permitrack.application.ports.password_hasher import PasswordHasher
from permitrack.application.ports.token_service import TokenService
from permitrack.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "CapabilityResolver",
    "PasswordHasher",
    "TokenService",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
