"""Authorization guards applied at the top of every use case."""

from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.ports import CapabilityResolver
from permitrack.domain.entities import User
from permitrack.domain.exceptions import AuthenticationError, AuthorizationError
from permitrack.domain.value_objects import Capability


async def require_capability(
    resolver: CapabilityResolver,
    actor: ActorContext | None,
    capability: Capability,
) -> ActorContext:
    """Return actor if it holds capability.

    A missing actor is an authentication failure, never a permission one.
    """
    if actor is None:
        raise AuthenticationError(AuthenticationError.REQUIRED)
    if not await resolver.check(actor.user, capability):
        raise AuthorizationError(AuthorizationError.PERMISSION_DENIED)
    return actor


def require_region(user: User, region: str) -> None:
    """Raise AuthorizationError unless user may act on region."""
    if not user.can_access_region(region):
        raise AuthorizationError(AuthorizationError.ACCESS_DENIED)
