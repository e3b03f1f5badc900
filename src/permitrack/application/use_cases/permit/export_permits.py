"""Export permits use case."""

from permitrack.application.authorization import require_capability
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.permit_dto import PermitFilter
from permitrack.application.ports import CapabilityResolver
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.application.use_cases.permit.get_permit import scope_filter
from permitrack.domain.activity_details import export_details
from permitrack.domain.entities import Permit
from permitrack.domain.value_objects import ActivityAction, Capability


class ExportPermitsUseCase:
    """Select permits for export with the same scoping as listing."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        auditor: ActivityAuditor,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._auditor = auditor

    async def execute(self, actor: ActorContext | None, permit_filter: PermitFilter) -> list[Permit]:
        actor = await require_capability(self._resolver, actor, Capability.EXPORT_PERMITS)
        async with self._uow_factory() as uow:
            permits = await uow.permits.list(scope_filter(actor.user, permit_filter))

        await self._auditor.record(
            actor, ActivityAction.EXPORT_PERMITS, export_details(len(permits))
        )
        return permits
