"""Self-registration and password reset use cases."""

from dataclasses import replace
from uuid import uuid4

from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.user_dto import UserCreateInput
from permitrack.application.ports import PasswordHasher
from permitrack.application.validation import (
    require_text,
    validate_email,
    validate_password,
    validate_regions,
    validate_username,
)
from permitrack.domain.entities import User
from permitrack.domain.exceptions import AuthenticationError, ConflictError
from permitrack.domain.value_objects import Role

DUPLICATE_USER = "Username or email already exists"
DEFAULT_REGIONS = ("headquarters",)


def build_user(
    input_data: UserCreateInput,
    password_hasher: PasswordHasher,
    default_regions: tuple[str, ...],
    clock: Clock,
) -> User:
    """Validated User from create input, password hashed."""
    regions = input_data.regions if input_data.regions is not None else list(default_regions)
    return User(
        id=uuid4(),
        username=validate_username(input_data.username),
        password_hash=password_hasher.hash(validate_password(input_data.password)),
        email=validate_email(input_data.email),
        first_name=require_text(input_data.first_name, "firstName"),
        last_name=require_text(input_data.last_name, "lastName"),
        role=input_data.role,
        regions=validate_regions(regions),
        created_at=clock(),
    )


class RegisterUseCase:
    """Public registration. New accounts are always observers."""

    def __init__(
        self,
        unit_of_work_factory: type,
        password_hasher: PasswordHasher,
        default_regions: tuple[str, ...] = DEFAULT_REGIONS,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._hasher = password_hasher
        self._default_regions = default_regions
        self._clock = clock

    async def execute(self, input_data: UserCreateInput) -> User:
        user = build_user(
            replace(input_data, role=Role.OBSERVER),
            self._hasher,
            self._default_regions,
            self._clock,
        )
        async with self._uow_factory() as uow:
            if await uow.users.find_conflicting(user.username, user.email):
                raise ConflictError(DUPLICATE_USER)
            await uow.users.create(user)
        return replace(user, password_hash="")


class ResetPasswordUseCase:
    """Change a password given the current one."""

    def __init__(self, unit_of_work_factory: type, password_hasher: PasswordHasher) -> None:
        self._uow_factory = unit_of_work_factory
        self._hasher = password_hasher

    async def execute(self, username: str, old_password: str, new_password: str) -> None:
        username = require_text(username, "username")
        new_password = validate_password(new_password, "newPassword")
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_username(username)
            if (
                not user
                or not isinstance(old_password, str)
                or not self._hasher.is_hash(user.password_hash)
                or not self._hasher.verify(old_password, user.password_hash)
            ):
                raise AuthenticationError(AuthenticationError.INVALID_CREDENTIALS)
            await uow.users.set_password_hash(user.id, self._hasher.hash(new_password))
