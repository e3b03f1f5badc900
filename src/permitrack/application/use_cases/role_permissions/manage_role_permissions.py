"""Role-permission matrix use cases."""

import logging

from permitrack.application.authorization import require_capability
from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.role_permissions_dto import EffectiveRolePermissions
from permitrack.application.ports import CapabilityResolver
from permitrack.application.validation import parse_role
from permitrack.domain.entities import RolePermissions
from permitrack.domain.exceptions import AuthorizationError, NotFound, ValidationError
from permitrack.domain.value_objects import Capability, Role

logger = logging.getLogger(__name__)

ADMIN_ONLY = "Only admins can change role permissions"
ADMIN_KEEPS_MANAGE = f"The admin role must keep {Capability.MANAGE_PERMISSIONS.value}"


def _require_admin(actor: ActorContext) -> None:
    if actor.user.role is not Role.ADMIN:
        raise AuthorizationError(ADMIN_ONLY)


def parse_capabilities(value: object) -> dict[str, bool]:
    """Validate an override map of capability name to bool."""
    if not isinstance(value, dict):
        raise ValidationError("capabilities must be an object")
    known = {cap.value for cap in Capability}
    unknown = sorted(k for k in value if k not in known)
    if unknown:
        raise ValidationError(f"Unknown capabilities: {', '.join(unknown)}")
    for name, granted in value.items():
        if not isinstance(granted, bool):
            raise ValidationError(f"{name} must be a boolean")
    return dict(value)


class ListRolePermissionsUseCase:
    """Effective matrix for every role."""

    def __init__(self, unit_of_work_factory: type, capability_resolver: CapabilityResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver

    async def execute(self, actor: ActorContext | None) -> list[EffectiveRolePermissions]:
        await require_capability(self._resolver, actor, Capability.MANAGE_USERS)
        async with self._uow_factory() as uow:
            overridden = {record.role for record in await uow.role_permissions.list_all()}
        return [
            EffectiveRolePermissions(
                role=role,
                capabilities=await self._resolver.effective(role),
                overridden=role in overridden,
            )
            for role in Role
        ]


class UpdateRolePermissionsUseCase:
    """Store an override that fully replaces a role's default capabilities."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._clock = clock

    async def execute(
        self, actor: ActorContext | None, role: str, capabilities: object
    ) -> EffectiveRolePermissions:
        actor = await require_capability(self._resolver, actor, Capability.MANAGE_PERMISSIONS)
        _require_admin(actor)
        parsed_role = parse_role(role)
        parsed = parse_capabilities(capabilities)
        if parsed_role is Role.ADMIN and not parsed.get(Capability.MANAGE_PERMISSIONS.value):
            raise ValidationError(ADMIN_KEEPS_MANAGE)

        missing = [cap.value for cap in Capability if cap.value not in parsed]
        if missing:
            logger.warning(
                "Override for role %s omits %s; they are denied", parsed_role, ", ".join(missing)
            )

        record = RolePermissions(role=parsed_role, capabilities=parsed, updated_at=self._clock())
        async with self._uow_factory() as uow:
            await uow.role_permissions.upsert(record)
        logger.info("Role permissions for %s overridden by %s", parsed_role, actor.user.username)

        return EffectiveRolePermissions(
            role=parsed_role,
            capabilities=await self._resolver.effective(parsed_role),
            overridden=True,
        )


class ResetRolePermissionsUseCase:
    """Drop a role's override, restoring the default matrix."""

    def __init__(self, unit_of_work_factory: type, capability_resolver: CapabilityResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver

    async def execute(self, actor: ActorContext | None, role: str) -> EffectiveRolePermissions:
        actor = await require_capability(self._resolver, actor, Capability.MANAGE_PERMISSIONS)
        _require_admin(actor)
        parsed_role = parse_role(role)

        async with self._uow_factory() as uow:
            if not await uow.role_permissions.delete(parsed_role.value):
                raise NotFound("Role permissions", parsed_role.value)
        logger.info("Role permissions for %s reset by %s", parsed_role, actor.user.username)

        return EffectiveRolePermissions(
            role=parsed_role,
            capabilities=await self._resolver.effective(parsed_role),
            overridden=False,
        )
