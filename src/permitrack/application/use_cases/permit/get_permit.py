"""Permit read use cases."""

from uuid import UUID

from permitrack.application.authorization import require_capability, require_region
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.permit_dto import PermitFilter
from permitrack.application.ports import CapabilityResolver
from permitrack.domain.entities import Permit, User
from permitrack.domain.exceptions import NotFound
from permitrack.domain.value_objects import Capability


def scope_filter(user: User, permit_filter: PermitFilter) -> PermitFilter:
    """Restrict the filter to user's regions unless the role bypasses scoping."""
    permit_filter.regions = None if user.role.bypasses_region_scope else list(user.regions)
    permit_filter.search = (permit_filter.search or "").strip() or None
    return permit_filter


class GetPermitUseCase:
    """Get one permit, subject to region scoping."""

    def __init__(self, unit_of_work_factory: type, capability_resolver: CapabilityResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver

    async def execute(self, actor: ActorContext | None, permit_id: UUID) -> Permit:
        actor = await require_capability(self._resolver, actor, Capability.VIEW_PERMITS)
        async with self._uow_factory() as uow:
            permit = await uow.permits.get_by_id(permit_id)
        if not permit:
            raise NotFound("Permit", str(permit_id))
        require_region(actor.user, permit.region)
        return permit


class ListPermitsUseCase:
    """List permits visible to the actor, newest first."""

    def __init__(self, unit_of_work_factory: type, capability_resolver: CapabilityResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver

    async def execute(self, actor: ActorContext | None, permit_filter: PermitFilter) -> list[Permit]:
        actor = await require_capability(self._resolver, actor, Capability.VIEW_PERMITS)
        async with self._uow_factory() as uow:
            return await uow.permits.list(scope_filter(actor.user, permit_filter))
