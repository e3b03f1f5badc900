"""Authentication gate - bearer token to actor context."""

import logging

from permitrack.application.dto.actor_context import UNKNOWN, ActorContext
from permitrack.application.ports import TokenService
from permitrack.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def parse_bearer(authorization: str | None) -> str:
    """Return the token from an Authorization header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError(AuthenticationError.REQUIRED)
    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise AuthenticationError(AuthenticationError.REQUIRED)
    return token


class AuthenticateUseCase:
    """Resolve the caller from a bearer token.

    The user record is re-read on every request so role and region changes
    take effect without waiting for the token to expire.
    """

    def __init__(self, unit_of_work_factory: type, token_service: TokenService) -> None:
        self._uow_factory = unit_of_work_factory
        self._token_service = token_service

    async def execute(
        self,
        authorization: str | None,
        source_ip: str | None = None,
        user_agent: str | None = None,
    ) -> ActorContext:
        token = parse_bearer(authorization)
        try:
            claims = self._token_service.decode(token)
        except AuthenticationError as e:
            logger.info("Rejected bearer token from %s: %s", source_ip or UNKNOWN, e)
            raise

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(claims.user_id)
        if not user:
            logger.info("Token for deleted user %s rejected", claims.username)
            raise AuthenticationError(AuthenticationError.USER_GONE)

        return ActorContext(
            user=user,
            source_ip=source_ip or UNKNOWN,
            user_agent=user_agent or UNKNOWN,
        )
