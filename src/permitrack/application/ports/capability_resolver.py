"""Capability resolver port - role-permission matrix."""

from typing import Protocol

from permitrack.domain.entities import User
from permitrack.domain.value_objects import Capability, Role


class CapabilityResolver(Protocol):
    """Port for resolving a role's effective capabilities."""

    async def effective(self, role: Role | str) -> dict[Capability, bool]: ...

    async def check(self, user: User, capability: Capability) -> bool: ...
