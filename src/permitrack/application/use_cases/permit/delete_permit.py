"""Delete permit use case."""

from uuid import UUID

from permitrack.application.authorization import require_capability
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.ports import CapabilityResolver
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.domain.activity_details import permit_details
from permitrack.domain.entities import Permit
from permitrack.domain.exceptions import NotFound
from permitrack.domain.value_objects import ActivityAction, Capability


class DeletePermitUseCase:
    """Remove a permit and its materials. Not region scoped."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        auditor: ActivityAuditor,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._auditor = auditor

    async def execute(self, actor: ActorContext | None, permit_id: UUID) -> Permit:
        """Delete permit; returns the removed permit."""
        actor = await require_capability(self._resolver, actor, Capability.DELETE_PERMITS)

        async with self._uow_factory() as uow:
            existing = await uow.permits.get_by_id(permit_id)
            if not existing:
                raise NotFound("Permit", str(permit_id))
            if not await uow.permits.delete(permit_id):
                raise NotFound("Permit", str(permit_id))

        await self._auditor.record(
            actor,
            ActivityAction.DELETE_PERMIT,
            permit_details(
                ActivityAction.DELETE_PERMIT, existing.permit_number, existing.carrier_name
            ),
        )
        return existing
