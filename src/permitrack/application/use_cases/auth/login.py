"""Login use case."""

import hmac
import logging
from dataclasses import replace

from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.actor_context import UNKNOWN, ActorContext
from permitrack.application.dto.user_dto import LoginResult
from permitrack.application.ports import PasswordHasher, TokenService
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.application.validation import require_text
from permitrack.domain.activity_details import login_details
from permitrack.domain.entities import User
from permitrack.domain.exceptions import AuthenticationError, ValidationError
from permitrack.domain.value_objects import ActivityAction

logger = logging.getLogger(__name__)


class LoginUseCase:
    """Exchange username and password for a bearer token."""

    def __init__(
        self,
        unit_of_work_factory: type,
        token_service: TokenService,
        password_hasher: PasswordHasher,
        auditor: ActivityAuditor,
        allow_legacy_plaintext: bool = True,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._token_service = token_service
        self._hasher = password_hasher
        self._auditor = auditor
        self._allow_legacy_plaintext = allow_legacy_plaintext
        self._clock = clock

    async def execute(
        self,
        username: str,
        password: str,
        source_ip: str = UNKNOWN,
        user_agent: str = UNKNOWN,
    ) -> LoginResult:
        """Verify credentials, stamp lastLogin and issue a token.

        A plaintext stored password is accepted once when legacy passwords
        are enabled, and replaced with its hash.
        """
        username = require_text(username, "username")
        if not isinstance(password, str) or not password:
            raise ValidationError("password is required")

        now = self._clock()
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_username(username)
            if not user or not self._password_matches(user, password):
                logger.info("Failed login for %s from %s", username, source_ip)
                raise AuthenticationError(AuthenticationError.INVALID_CREDENTIALS)

            if not self._hasher.is_hash(user.password_hash):
                logger.warning("Upgrading plaintext password for user %s", user.username)
                user.password_hash = self._hasher.hash(password)
                await uow.users.set_password_hash(user.id, user.password_hash)

            await uow.users.set_last_login(user.id, now)
            user.last_login = now

        actor = ActorContext(user=user, source_ip=source_ip, user_agent=user_agent)
        await self._auditor.record(actor, ActivityAction.LOGIN, login_details(user.username))

        return LoginResult(
            token=self._token_service.issue(user),
            user=replace(user, password_hash=""),
        )

    def _password_matches(self, user: User, password: str) -> bool:
        stored = user.password_hash
        if self._hasher.is_hash(stored):
            return self._hasher.verify(password, stored)
        if not self._allow_legacy_plaintext:
            return False
        return hmac.compare_digest(stored.encode(), password.encode())
