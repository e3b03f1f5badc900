"""Role permissions DTOs."""

from dataclasses import dataclass

from permitrack.domain.value_objects import Capability, Role


@dataclass
class EffectiveRolePermissions:
    """Capabilities a role currently resolves to, and whether they come from an override."""

    role: Role
    capabilities: dict[Capability, bool]
    overridden: bool = False
