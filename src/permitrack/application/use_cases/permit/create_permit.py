"""Create permit use case."""

from uuid import uuid4

from permitrack.application.authorization import require_capability, require_region
from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.permit_dto import PermitCreateInput
from permitrack.application.ports import CapabilityResolver
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.application.use_cases.permit.fields import normalize_permit
from permitrack.domain.activity_details import permit_details
from permitrack.domain.entities import Permit
from permitrack.domain.value_objects import ActivityAction, Capability


class CreatePermitUseCase:
    """Create an open permit in one of the actor's regions."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        auditor: ActivityAuditor,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._auditor = auditor
        self._clock = clock

    async def execute(self, actor: ActorContext | None, input_data: PermitCreateInput) -> Permit:
        """Persist the permit. Duplicate numbers raise ConflictError from the store."""
        actor = await require_capability(self._resolver, actor, Capability.CREATE_PERMITS)

        permit = normalize_permit(
            Permit(
                id=uuid4(),
                permit_number=input_data.permit_number,
                date=input_data.date,
                region=input_data.region,
                location=input_data.location,
                carrier_name=input_data.carrier_name,
                carrier_id=input_data.carrier_id,
                request_type=input_data.request_type,
                vehicle_plate=input_data.vehicle_plate,
                materials=list(input_data.materials),
                created_by=actor.user.id,
                created_at=self._clock(),
                can_reopen=True,
            )
        )
        require_region(actor.user, permit.region)

        async with self._uow_factory() as uow:
            await uow.permits.create(permit)

        await self._auditor.record(
            actor,
            ActivityAction.CREATE_PERMIT,
            permit_details(ActivityAction.CREATE_PERMIT, permit.permit_number),
        )
        return permit
