"""Request helpers shared by resources."""

from typing import Any
from uuid import UUID

import falcon
import falcon.asgi

from permitrack.application.dto.actor_context import UNKNOWN, ActorContext
from permitrack.domain.exceptions import AuthenticationError, NotFound, ValidationError

_CLIENT_IP_HEADERS = ("X-Forwarded-For", "X-Real-IP", "CF-Connecting-IP")


def client_ip(req: falcon.asgi.Request) -> str:
    """Client address by proxy header precedence, then the socket peer."""
    for header in _CLIENT_IP_HEADERS:
        value = req.get_header(header)
        if value:
            first = value.split(",")[0].strip()
            if first:
                return first
    return req.remote_addr or UNKNOWN


def user_agent(req: falcon.asgi.Request) -> str:
    return req.get_header("User-Agent") or UNKNOWN


def actor(req: falcon.asgi.Request) -> ActorContext:
    """Actor attached by AuthMiddleware."""
    ctx = getattr(req.context, "actor", None)
    if ctx is None:
        raise AuthenticationError(AuthenticationError.REQUIRED)
    return ctx


async def json_body(req: falcon.asgi.Request) -> dict[str, Any]:
    """Request body as a JSON object. Malformed or missing bodies are ValidationError."""
    try:
        body = await req.get_media()
    except (falcon.MediaNotFoundError, falcon.MediaMalformedError):
        raise ValidationError("Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def parse_id(value: str, entity: str) -> UUID:
    """Path id as UUID. An id that cannot exist is reported as not found."""
    try:
        return UUID(value)
    except ValueError:
        raise NotFound(entity, value) from None
