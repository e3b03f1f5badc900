"""Create user use case (administrative)."""

from dataclasses import replace

from permitrack.application.authorization import require_capability
from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.user_dto import UserCreateInput
from permitrack.application.ports import CapabilityResolver, PasswordHasher
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.application.use_cases.auth.register import (
    DEFAULT_REGIONS,
    DUPLICATE_USER,
    build_user,
)
from permitrack.domain.activity_details import user_details
from permitrack.domain.entities import User
from permitrack.domain.exceptions import ConflictError
from permitrack.domain.value_objects import ActivityAction, Capability


class CreateUserUseCase:
    """Create a user with any role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        password_hasher: PasswordHasher,
        auditor: ActivityAuditor,
        default_regions: tuple[str, ...] = DEFAULT_REGIONS,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._hasher = password_hasher
        self._auditor = auditor
        self._default_regions = default_regions
        self._clock = clock

    async def execute(self, actor: ActorContext | None, input_data: UserCreateInput) -> User:
        actor = await require_capability(self._resolver, actor, Capability.MANAGE_USERS)
        user = build_user(input_data, self._hasher, self._default_regions, self._clock)

        async with self._uow_factory() as uow:
            if await uow.users.find_conflicting(user.username, user.email):
                raise ConflictError(DUPLICATE_USER)
            await uow.users.create(user)

        await self._auditor.record(
            actor,
            ActivityAction.CREATE_USER,
            user_details(ActivityAction.CREATE_USER, user.username),
        )
        return replace(user, password_hash="")
