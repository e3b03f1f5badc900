"""Delete user use case."""

from uuid import UUID

from permitrack.application.authorization import require_capability
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.ports import CapabilityResolver
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.domain.activity_details import user_details
from permitrack.domain.exceptions import NotFound, SelfDeletionError
from permitrack.domain.value_objects import ActivityAction, Capability


class DeleteUserUseCase:
    """Delete another user. Permits and log entries they authored are kept."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        auditor: ActivityAuditor,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._auditor = auditor

    async def execute(self, actor: ActorContext | None, user_id: UUID) -> None:
        actor = await require_capability(self._resolver, actor, Capability.MANAGE_USERS)
        if actor.user.id == user_id:
            raise SelfDeletionError()

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user or not await uow.users.delete(user_id):
                raise NotFound("User", str(user_id))

        await self._auditor.record(
            actor,
            ActivityAction.DELETE_USER,
            user_details(ActivityAction.DELETE_USER, user.username),
        )
