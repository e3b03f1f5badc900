"""Translate exceptions into JSON error responses."""

import logging

import falcon
import falcon.asgi

from permitrack.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFound,
    PermitrackError,
    StateError,
    ValidationError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"

_STATUS_BY_ERROR: tuple[tuple[type[PermitrackError], str], ...] = (
    (ValidationError, falcon.HTTP_400),
    (StateError, falcon.HTTP_400),
    (AuthenticationError, falcon.HTTP_401),
    (AuthorizationError, falcon.HTTP_403),
    (NotFound, falcon.HTTP_404),
    (ConflictError, falcon.HTTP_409),
    (InternalError, falcon.HTTP_500),
)


def status_for(error: PermitrackError) -> str:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return falcon.HTTP_500


async def handle_permitrack_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: PermitrackError, params: dict
) -> None:
    """Domain errors become {"error": message} with the matching status."""
    resp.status = status_for(ex)
    if isinstance(ex, InternalError):
        logger.error("%s %s failed: %s", req.method, req.path, ex, exc_info=ex)
        resp.media = {"error": INTERNAL_ERROR}
        return
    resp.media = {"error": str(ex)}


async def handle_http_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: falcon.HTTPError, params: dict
) -> None:
    """Framework errors (bad params, unknown routes) use the same JSON shape."""
    resp.status = ex.status
    if ex.headers:
        resp.set_headers(ex.headers)
    resp.media = {"error": ex.description or ex.title}


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": INTERNAL_ERROR}


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(falcon.HTTPError, handle_http_error)
    app.add_error_handler(PermitrackError, handle_permitrack_error)
