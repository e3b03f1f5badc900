"""Close permit use case."""

from uuid import UUID

from permitrack.application.authorization import require_capability, require_region
from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.ports import CapabilityResolver
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.domain.activity_details import permit_details
from permitrack.domain.entities import Permit
from permitrack.domain.exceptions import NotFound, StateError
from permitrack.domain.value_objects import ActivityAction, Capability

ALREADY_CLOSED = "Permit is already closed"


class ClosePermitUseCase:
    """Close an open permit, recording who closed it and when."""

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

    async def execute(self, actor: ActorContext | None, permit_id: UUID) -> Permit:
        """Close permit. Of two concurrent closes only the first conditional write wins."""
        actor = await require_capability(self._resolver, actor, Capability.CLOSE_PERMITS)
        user = actor.user

        async with self._uow_factory() as uow:
            existing = await uow.permits.get_by_id(permit_id)
            if not existing:
                raise NotFound("Permit", str(permit_id))
            require_region(user, existing.region)
            if existing.is_closed:
                raise StateError(ALREADY_CLOSED)

            closed = await uow.permits.close_if_open(
                permit_id, user.id, user.closer_label, self._clock()
            )
            if closed is None:
                if await uow.permits.get_by_id(permit_id) is None:
                    raise NotFound("Permit", str(permit_id))
                raise StateError(ALREADY_CLOSED)

        await self._auditor.record(
            actor,
            ActivityAction.CLOSE_PERMIT,
            permit_details(ActivityAction.CLOSE_PERMIT, closed.permit_number),
        )
        return closed
