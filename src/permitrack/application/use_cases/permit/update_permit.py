"""Update (edit) permit use case."""

from dataclasses import fields, replace
from uuid import UUID

from permitrack.application.authorization import require_capability, require_region
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.permit_dto import PermitUpdateInput
from permitrack.application.ports import CapabilityResolver
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.application.use_cases.permit.fields import normalize_permit
from permitrack.domain.activity_details import permit_details
from permitrack.domain.entities import Permit
from permitrack.domain.exceptions import NotFound, StateError
from permitrack.domain.value_objects import ActivityAction, Capability

CANNOT_EDIT_CLOSED = "Cannot edit closed permit"


class UpdatePermitUseCase:
    """Apply a partial update to an open permit."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        auditor: ActivityAuditor,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._auditor = auditor

    async def execute(
        self, actor: ActorContext | None, permit_id: UUID, changes: PermitUpdateInput
    ) -> Permit:
        """Only supplied fields change. Region access is checked on the stored region."""
        actor = await require_capability(self._resolver, actor, Capability.EDIT_PERMITS)

        async with self._uow_factory() as uow:
            existing = await uow.permits.get_by_id(permit_id)
            if not existing:
                raise NotFound("Permit", str(permit_id))
            require_region(actor.user, existing.region)
            if existing.is_closed:
                raise StateError(CANNOT_EDIT_CLOSED)

            supplied = {
                f.name: getattr(changes, f.name)
                for f in fields(changes)
                if getattr(changes, f.name) is not None
            }
            if "materials" in supplied:
                supplied["materials"] = list(supplied["materials"])
            candidate = normalize_permit(replace(existing, **supplied))

            updated = await uow.permits.update_if_open(candidate)
            if updated is None:
                if await uow.permits.get_by_id(permit_id) is None:
                    raise NotFound("Permit", str(permit_id))
                raise StateError(CANNOT_EDIT_CLOSED)

        await self._auditor.record(
            actor,
            ActivityAction.UPDATE_PERMIT,
            permit_details(ActivityAction.UPDATE_PERMIT, updated.permit_number),
        )
        return updated
