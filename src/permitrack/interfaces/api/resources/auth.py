"""Authentication API resources."""

import falcon
import falcon.asgi

from permitrack.application.dto.user_dto import UserCreateInput
from permitrack.application.use_cases.auth.login import LoginUseCase
from permitrack.application.use_cases.auth.register import RegisterUseCase, ResetPasswordUseCase
from permitrack.interfaces.api.request import actor, client_ip, json_body, user_agent
from permitrack.interfaces.api.serializers import user_to_dict


class LoginResource:
    """POST /auth/login"""

    public = True

    def __init__(self, login: LoginUseCase) -> None:
        self._login = login

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        result = await self._login.execute(
            body.get("username"),
            body.get("password"),
            source_ip=client_ip(req),
            user_agent=user_agent(req),
        )
        resp.media = {"token": result.token, "user": user_to_dict(result.user)}
        resp.status = falcon.HTTP_200


class RegisterResource:
    """POST /auth/register - self-service observer accounts."""

    public = True

    def __init__(self, register: RegisterUseCase) -> None:
        self._register = register

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        user = await self._register.execute(
            UserCreateInput(
                username=body.get("username"),
                password=body.get("password"),
                email=body.get("email"),
                first_name=body.get("firstName"),
                last_name=body.get("lastName"),
                regions=body.get("region"),
            )
        )
        resp.media = {"message": "Registration successful", "user": user_to_dict(user)}
        resp.status = falcon.HTTP_201


class ResetPasswordResource:
    """POST /auth/reset-password"""

    public = True

    def __init__(self, reset_password: ResetPasswordUseCase) -> None:
        self._reset_password = reset_password

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        await self._reset_password.execute(
            body.get("username"), body.get("oldPassword"), body.get("newPassword")
        )
        resp.media = {"message": "Password reset successful"}
        resp.status = falcon.HTTP_200


class SessionResource:
    """GET /auth/me and POST /auth/logout.

    Tokens are stateless, so logout only acknowledges; the client drops
    the token.
    """

    async def on_get_me(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {"user": user_to_dict(actor(req).user)}
        resp.status = falcon.HTTP_200

    async def on_post_logout(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor(req)
        resp.media = {"message": "Logout successful"}
        resp.status = falcon.HTTP_200
