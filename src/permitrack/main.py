"""Application entry point and composition root."""

import argparse
import asyncio
import logging
from datetime import timedelta

import falcon.asgi

from permitrack import __version__
from permitrack.application.clock import utc_now
from permitrack.application.dto.user_dto import UserCreateInput
from permitrack.application.use_cases.activity.query_activity import (
    ListActivityActionsUseCase,
    ListActivityUseCase,
)
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.application.use_cases.auth.authenticate import AuthenticateUseCase
from permitrack.application.use_cases.auth.login import LoginUseCase
from permitrack.application.use_cases.auth.register import (
    DUPLICATE_USER,
    RegisterUseCase,
    ResetPasswordUseCase,
    build_user,
)
from permitrack.application.use_cases.permit.close_permit import ClosePermitUseCase
from permitrack.application.use_cases.permit.create_permit import CreatePermitUseCase
from permitrack.application.use_cases.permit.delete_permit import DeletePermitUseCase
from permitrack.application.use_cases.permit.export_permits import ExportPermitsUseCase
from permitrack.application.use_cases.permit.get_permit import GetPermitUseCase, ListPermitsUseCase
from permitrack.application.use_cases.permit.reopen_permit import ReopenPermitUseCase
from permitrack.application.use_cases.permit.update_permit import UpdatePermitUseCase
from permitrack.application.use_cases.role_permissions.manage_role_permissions import (
    ListRolePermissionsUseCase,
    ResetRolePermissionsUseCase,
    UpdateRolePermissionsUseCase,
)
from permitrack.application.use_cases.statistics.get_statistics import GetStatisticsUseCase
from permitrack.application.use_cases.user.create_user import CreateUserUseCase
from permitrack.application.use_cases.user.delete_user import DeleteUserUseCase
from permitrack.application.use_cases.user.list_users import ListUsersUseCase
from permitrack.application.use_cases.user.update_user import UpdateUserUseCase
from permitrack.application.validation import parse_role
from permitrack.config import Settings, get_settings
from permitrack.domain.exceptions import ConflictError, PermitrackError
from permitrack.infrastructure.auth.bcrypt_hasher import BcryptPasswordHasher
from permitrack.infrastructure.auth.jwt_token_service import JwtTokenService
from permitrack.infrastructure.permission.capability_resolver import MatrixCapabilityResolver
from permitrack.infrastructure.persistence.postgres.connection import create_pool
from permitrack.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from permitrack.interfaces.api.app import Resources, create_app
from permitrack.interfaces.api.middleware.auth import AuthMiddleware
from permitrack.interfaces.api.middleware.cors import CORSMiddleware
from permitrack.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from permitrack.interfaces.api.middleware.timeout import RequestTimeoutMiddleware
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

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def build_falcon_app(
    settings: Settings,
    uow_factory: object,
    middleware: list,
    health: HealthResource | None = None,
) -> falcon.asgi.App:
    """Wire use cases and resources onto a UnitOfWork factory."""
    resolver = MatrixCapabilityResolver(uow_factory)
    hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    tokens = JwtTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(minutes=settings.jwt_expires_minutes),
    )
    auditor = ActivityAuditor(uow_factory)
    default_regions = settings.default_region_list

    resources = Resources(
        health=health or HealthResource(),
        login=LoginResource(
            LoginUseCase(
                uow_factory,
                tokens,
                hasher,
                auditor,
                allow_legacy_plaintext=settings.allow_legacy_plaintext_passwords,
            )
        ),
        register=RegisterResource(RegisterUseCase(uow_factory, hasher, default_regions)),
        reset_password=ResetPasswordResource(ResetPasswordUseCase(uow_factory, hasher)),
        session=SessionResource(),
        permits=PermitsResource(
            ListPermitsUseCase(uow_factory, resolver),
            CreatePermitUseCase(uow_factory, resolver, auditor),
        ),
        permit=PermitResource(
            GetPermitUseCase(uow_factory, resolver),
            UpdatePermitUseCase(uow_factory, resolver, auditor),
            DeletePermitUseCase(uow_factory, resolver, auditor),
            ClosePermitUseCase(uow_factory, resolver, auditor),
            ReopenPermitUseCase(
                uow_factory,
                resolver,
                auditor,
                reopen_window=timedelta(minutes=settings.reopen_window_minutes),
            ),
        ),
        permit_export=PermitExportResource(ExportPermitsUseCase(uow_factory, resolver, auditor)),
        users=UsersResource(
            ListUsersUseCase(uow_factory, resolver),
            CreateUserUseCase(uow_factory, resolver, hasher, auditor, default_regions),
        ),
        user=UserResource(
            UpdateUserUseCase(uow_factory, resolver, hasher, auditor),
            DeleteUserUseCase(uow_factory, resolver, auditor),
        ),
        role_permissions=RolePermissionsResource(
            ListRolePermissionsUseCase(uow_factory, resolver),
            UpdateRolePermissionsUseCase(uow_factory, resolver),
            ResetRolePermissionsUseCase(uow_factory, resolver),
        ),
        activity=ActivityResource(
            ListActivityUseCase(uow_factory, resolver),
            ListActivityActionsUseCase(uow_factory, resolver),
        ),
        statistics=StatisticsResource(GetStatisticsUseCase(uow_factory, resolver)),
    )
    return create_app(
        resources,
        middleware=[*middleware, AuthMiddleware(AuthenticateUseCase(uow_factory, tokens))],
    )


def create_permitrack_app(settings: Settings | None = None) -> RequestTimeoutMiddleware:
    """Composition root - build the ASGI app with all dependencies."""
    settings = settings or get_settings()
    if settings.jwt_secret == "change-me" and settings.environment == "production":
        logger.warning("JWT_SECRET is the default value; set it before serving real traffic")

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)
    app = build_falcon_app(
        settings,
        uow_factory,
        middleware=[CORSMiddleware(settings.cors_origin_list), PoolLifespanMiddleware(pool)],
        health=HealthResource(pool),
    )
    return RequestTimeoutMiddleware(app, settings.request_timeout_seconds)


async def create_user(settings: Settings, args: argparse.Namespace) -> None:
    """Insert a user directly, bypassing the API (bootstrap the first admin)."""
    pool = create_pool(settings.database_url, min_size=1, max_size=1)
    await pool.open()
    try:
        uow_factory = create_uow_factory(pool)
        user = build_user(
            UserCreateInput(
                username=args.username,
                password=args.password,
                email=args.email,
                first_name=args.first_name,
                last_name=args.last_name,
                role=parse_role(args.role),
                regions=args.region,
            ),
            BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
            settings.default_region_list,
            utc_now,
        )
        async with uow_factory() as uow:
            if await uow.users.find_conflicting(user.username, user.email):
                raise ConflictError(DUPLICATE_USER)
            await uow.users.create(user)
        logger.info("Created %s user %s", user.role, user.username)
    finally:
        await pool.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="permitrack", description="Permit tracking service")
    parser.add_argument("--version", action="version", version=f"permitrack {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    user = sub.add_parser("create-user", help="Create a user directly in the database")
    user.add_argument("--username", required=True)
    user.add_argument("--password", required=True)
    user.add_argument("--email", required=True)
    user.add_argument("--first-name", required=True)
    user.add_argument("--last-name", required=True)
    user.add_argument("--role", default="admin")
    user.add_argument("--region", action="append", help="Repeat for several regions")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command == "serve":
        import uvicorn

        logger.info("Permitrack v%s starting (%s)", __version__, settings.environment)
        uvicorn.run(
            create_permitrack_app(settings),
            host=args.host or settings.host,
            port=args.port or settings.port,
            log_level=settings.log_level.lower(),
        )
        return 0

    try:
        asyncio.run(create_user(settings, args))
    except PermitrackError as e:
        logger.error("Could not create user: %s", e)
        return 1
    return 0
