"""Auth middleware - resolves the bearer token into an actor for protected resources."""

import falcon.asgi

from permitrack.application.use_cases.auth.authenticate import AuthenticateUseCase
from permitrack.interfaces.api.request import client_ip, user_agent


class AuthMiddleware:
    """Sets req.context.actor before any non-public responder runs.

    Resources opt out with a class attribute ``public = True``. Failures
    raise AuthenticationError, which the error handler turns into a 401.
    """

    def __init__(self, authenticate: AuthenticateUseCase) -> None:
        self._authenticate = authenticate

    async def process_resource(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, params
    ) -> None:
        req.context.actor = None
        if resource is None or getattr(resource, "public", False):
            return
        req.context.actor = await self._authenticate.execute(
            req.get_header("Authorization"),
            source_ip=client_ip(req),
            user_agent=user_agent(req),
        )
