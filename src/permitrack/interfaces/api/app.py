"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from permitrack.interfaces.api.errors import register_error_handlers
from permitrack.interfaces.api.resources.activity import ActivityResource
from permitrack.interfaces.api.resources.auth import (
    LoginResource,
    RegisterResource,
    ResetPasswordResource,
    SessionResource,
)
from permitrack.interfaces.api.resources.health import HealthResource
from permitrack.interfaces.api.resources.permits import (
    PermitExportResource,
    PermitResource,
    PermitsResource,
)
from permitrack.interfaces.api.resources.statistics import StatisticsResource
from permitrack.interfaces.api.resources.users import (
    RolePermissionsResource,
    UserResource,
    UsersResource,
)

ROUTE_PREFIXES = ("", "/api")


@dataclass
class Resources:
    """Every resource the API routes to."""

    health: HealthResource
    login: LoginResource
    register: RegisterResource
    reset_password: ResetPasswordResource
    session: SessionResource
    permits: PermitsResource
    permit: PermitResource
    permit_export: PermitExportResource
    users: UsersResource
    user: UserResource
    role_permissions: RolePermissionsResource
    activity: ActivityResource
    statistics: StatisticsResource


def add_routes(app: App, r: Resources, prefix: str = "") -> None:
    app.add_route(f"{prefix}/health", r.health)
    app.add_route(f"{prefix}/health/ready", r.health, suffix="ready")
    app.add_route(f"{prefix}/auth/login", r.login)
    app.add_route(f"{prefix}/auth/register", r.register)
    app.add_route(f"{prefix}/auth/reset-password", r.reset_password)
    app.add_route(f"{prefix}/auth/me", r.session, suffix="me")
    app.add_route(f"{prefix}/auth/logout", r.session, suffix="logout")
    app.add_route(f"{prefix}/permits", r.permits)
    app.add_route(f"{prefix}/permits/export", r.permit_export)
    app.add_route(f"{prefix}/permits/{{permit_id}}", r.permit)
    app.add_route(f"{prefix}/permits/{{permit_id}}/close", r.permit, suffix="close")
    app.add_route(f"{prefix}/permits/{{permit_id}}/reopen", r.permit, suffix="reopen")
    app.add_route(f"{prefix}/users", r.users)
    app.add_route(f"{prefix}/users/role-permissions", r.role_permissions)
    app.add_route(f"{prefix}/users/role-permissions/{{role}}", r.role_permissions, suffix="role")
    app.add_route(f"{prefix}/users/{{user_id}}", r.user)
    app.add_route(f"{prefix}/activity", r.activity)
    app.add_route(f"{prefix}/activity/actions", r.activity, suffix="actions")
    app.add_route(f"{prefix}/statistics", r.statistics)


def create_app(resources: Resources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with error handlers and routes under every prefix."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)
    for prefix in ROUTE_PREFIXES:
        add_routes(app, resources, prefix)
    return app
