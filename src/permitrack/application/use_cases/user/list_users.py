"""List users use case."""

from dataclasses import replace

from permitrack.application.authorization import require_capability
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.ports import CapabilityResolver
from permitrack.domain.entities import User
from permitrack.domain.value_objects import Capability


class ListUsersUseCase:
    """All users, newest first, without password hashes."""

    def __init__(self, unit_of_work_factory: type, capability_resolver: CapabilityResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver

    async def execute(self, actor: ActorContext | None) -> list[User]:
        await require_capability(self._resolver, actor, Capability.MANAGE_USERS)
        async with self._uow_factory() as uow:
            users = await uow.users.list_all()
        return [replace(user, password_hash="") for user in users]
