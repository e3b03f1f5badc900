"""Reopen permit use case."""

from datetime import timedelta
from uuid import UUID

from permitrack.application.authorization import require_capability
from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.ports import CapabilityResolver
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.domain.activity_details import permit_details
from permitrack.domain.entities import Permit
from permitrack.domain.exceptions import AuthorizationError, NotFound, StateError
from permitrack.domain.value_objects import ActivityAction, Capability

NOT_CLOSED = "Permit is not closed"
CANNOT_REOPEN = "Cannot reopen this permit"
DEFAULT_REOPEN_WINDOW = timedelta(hours=1)


class ReopenPermitUseCase:
    """Reopen a closed permit.

    Holders of canReopenAnyPermit may always reopen. Anyone else may only
    reopen a permit they closed themselves, and only within the window.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        auditor: ActivityAuditor,
        reopen_window: timedelta = DEFAULT_REOPEN_WINDOW,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._auditor = auditor
        self._reopen_window = reopen_window
        self._clock = clock

    async def execute(self, actor: ActorContext | None, permit_id: UUID) -> Permit:
        actor = await require_capability(self._resolver, actor, Capability.REOPEN_PERMITS)
        user = actor.user
        can_reopen_any = await self._resolver.check(user, Capability.REOPEN_ANY_PERMIT)

        async with self._uow_factory() as uow:
            existing = await uow.permits.get_by_id(permit_id)
            if not existing:
                raise NotFound("Permit", str(permit_id))
            if not existing.is_closed:
                raise StateError(NOT_CLOSED)
            if not can_reopen_any and not existing.closed_by_within(
                user.id, self._clock(), self._reopen_window
            ):
                raise AuthorizationError(CANNOT_REOPEN)

            reopened = await uow.permits.reopen_if_closed_at(permit_id, existing.closed_at)
            if reopened is None:
                current = await uow.permits.get_by_id(permit_id)
                if current is None:
                    raise NotFound("Permit", str(permit_id))
                if not current.is_closed:
                    raise StateError(NOT_CLOSED)
                raise StateError("Permit was closed again concurrently")

        await self._auditor.record(
            actor,
            ActivityAction.REOPEN_PERMIT,
            permit_details(ActivityAction.REOPEN_PERMIT, reopened.permit_number),
        )
        return reopened
