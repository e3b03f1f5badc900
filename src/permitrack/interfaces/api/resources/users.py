"""User management API resources."""

from typing import Any

import falcon
import falcon.asgi

from permitrack.application.dto.user_dto import UserCreateInput, UserUpdateInput
from permitrack.application.use_cases.role_permissions.manage_role_permissions import (
    ListRolePermissionsUseCase,
    ResetRolePermissionsUseCase,
    UpdateRolePermissionsUseCase,
)
from permitrack.application.use_cases.user.create_user import CreateUserUseCase
from permitrack.application.use_cases.user.delete_user import DeleteUserUseCase
from permitrack.application.use_cases.user.list_users import ListUsersUseCase
from permitrack.application.use_cases.user.update_user import UpdateUserUseCase
from permitrack.application.validation import parse_role
from permitrack.domain.value_objects import Role
from permitrack.interfaces.api.request import actor, json_body, parse_id
from permitrack.interfaces.api.serializers import role_permissions_to_dict, user_to_dict


def _optional_role(body: dict[str, Any]) -> Role | None:
    return parse_role(body["role"]) if "role" in body else None


class UsersResource:
    """GET/POST /users"""

    def __init__(self, list_users: ListUsersUseCase, create_user: CreateUserUseCase) -> None:
        self._list_users = list_users
        self._create_user = create_user

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        users = await self._list_users.execute(actor(req))
        resp.media = {"users": [user_to_dict(u) for u in users]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        user = await self._create_user.execute(
            actor(req),
            UserCreateInput(
                username=body.get("username"),
                password=body.get("password"),
                email=body.get("email"),
                first_name=body.get("firstName"),
                last_name=body.get("lastName"),
                role=_optional_role(body) or Role.OBSERVER,
                regions=body.get("region"),
            ),
        )
        resp.media = {"user": user_to_dict(user)}
        resp.status = falcon.HTTP_201


class UserResource:
    """PUT/DELETE /users/{user_id}"""

    def __init__(self, update_user: UpdateUserUseCase, delete_user: DeleteUserUseCase) -> None:
        self._update_user = update_user
        self._delete_user = delete_user

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str) -> None:
        body = await json_body(req)
        user = await self._update_user.execute(
            actor(req),
            parse_id(user_id, "User"),
            UserUpdateInput(
                username=body.get("username"),
                password=body.get("password"),
                email=body.get("email"),
                first_name=body.get("firstName"),
                last_name=body.get("lastName"),
                role=_optional_role(body),
                regions=body.get("region"),
            ),
        )
        resp.media = {"user": user_to_dict(user)}
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        await self._delete_user.execute(actor(req), parse_id(user_id, "User"))
        resp.media = {"message": "User deleted successfully"}
        resp.status = falcon.HTTP_200


class RolePermissionsResource:
    """GET /users/role-permissions and PUT/DELETE /users/role-permissions/{role}."""

    def __init__(
        self,
        list_role_permissions: ListRolePermissionsUseCase,
        update_role_permissions: UpdateRolePermissionsUseCase,
        reset_role_permissions: ResetRolePermissionsUseCase,
    ) -> None:
        self._list = list_role_permissions
        self._update = update_role_permissions
        self._reset = reset_role_permissions

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        matrix = await self._list.execute(actor(req))
        resp.media = {"rolePermissions": [role_permissions_to_dict(r) for r in matrix]}
        resp.status = falcon.HTTP_200

    async def on_put_role(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str
    ) -> None:
        """Body: {"permissions": {capability: bool, ...}}"""
        body = await json_body(req)
        result = await self._update.execute(actor(req), role, body.get("permissions"))
        resp.media = {"rolePermissions": role_permissions_to_dict(result)}
        resp.status = falcon.HTTP_200

    async def on_delete_role(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str
    ) -> None:
        result = await self._reset.execute(actor(req), role)
        resp.media = {"rolePermissions": role_permissions_to_dict(result)}
        resp.status = falcon.HTTP_200
