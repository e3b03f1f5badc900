"""Actor context DTO - authenticated user plus request attribution."""

from dataclasses import dataclass

from permitrack.domain.entities import User

UNKNOWN = "unknown"


@dataclass(frozen=True)
class ActorContext:
    """Trusted identity of the caller, freshly loaded for this request."""

    user: User
    source_ip: str = UNKNOWN
    user_agent: str = UNKNOWN
