"""Update user use case."""

from dataclasses import replace
from uuid import UUID

from permitrack.application.authorization import require_capability
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.user_dto import UserUpdateInput
from permitrack.application.ports import CapabilityResolver, PasswordHasher
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.application.use_cases.auth.register import DUPLICATE_USER
from permitrack.application.validation import (
    require_text,
    validate_email,
    validate_password,
    validate_regions,
    validate_username,
)
from permitrack.domain.activity_details import user_details
from permitrack.domain.entities import User
from permitrack.domain.exceptions import AuthorizationError, ConflictError, NotFound
from permitrack.domain.value_objects import ActivityAction, Capability, Role


class UpdateUserUseCase:
    """Partial user update. Only admins may change a role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        password_hasher: PasswordHasher,
        auditor: ActivityAuditor,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._hasher = password_hasher
        self._auditor = auditor

    async def execute(
        self, actor: ActorContext | None, user_id: UUID, changes: UserUpdateInput
    ) -> User:
        actor = await require_capability(self._resolver, actor, Capability.MANAGE_USERS)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", str(user_id))

            if changes.role is not None and changes.role != user.role:
                if actor.user.role is not Role.ADMIN:
                    raise AuthorizationError("Only admins can change roles")
                user.role = changes.role
            if changes.username is not None:
                user.username = validate_username(changes.username)
            if changes.email is not None:
                user.email = validate_email(changes.email)
            if changes.first_name is not None:
                user.first_name = require_text(changes.first_name, "firstName")
            if changes.last_name is not None:
                user.last_name = require_text(changes.last_name, "lastName")
            if changes.regions is not None:
                user.regions = validate_regions(changes.regions)
            if changes.password is not None:
                user.password_hash = self._hasher.hash(validate_password(changes.password))

            if changes.username is not None or changes.email is not None:
                conflict = await uow.users.find_conflicting(
                    changes.username and user.username,
                    changes.email and user.email,
                    exclude_id=user.id,
                )
                if conflict:
                    raise ConflictError(DUPLICATE_USER)

            await uow.users.update(user)

        await self._auditor.record(
            actor,
            ActivityAction.UPDATE_USER,
            user_details(ActivityAction.UPDATE_USER, user.username),
        )
        return replace(user, password_hash="")
