"""Capability resolver - role overrides over the default matrix."""

from permitrack.domain.entities import User
from permitrack.domain.permission_matrix import (
    default_capabilities,
    denied_capabilities,
    parse_role,
)
from permitrack.domain.value_objects import Capability, Role


class MatrixCapabilityResolver:
    """Resolves capabilities from role_permissions overrides, else the defaults.

    An override replaces the role's whole set; capabilities it does not
    list are denied. Unknown roles are denied everything.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def effective(self, role: Role | str) -> dict[Capability, bool]:
        parsed = parse_role(role)
        if parsed is None:
            return denied_capabilities()

        async with self._uow_factory() as uow:
            override = await uow.role_permissions.get(parsed.value)
        if override is None:
            return default_capabilities(parsed)
        return {cap: override.capabilities.get(cap.value) is True for cap in Capability}

    async def check(self, user: User, capability: Capability) -> bool:
        return (await self.effective(user.role))[capability]
