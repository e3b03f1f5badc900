"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from permitrack.application.dto.actor_context import ActorContext
from permitrack.config import Settings
from permitrack.interfaces.api.middleware.cors import CORSMiddleware
from permitrack.main import build_falcon_app

from tests.conftest import TEST_JWT_SECRET


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        cors_origins="http://localhost:5173,https://permits.example.com",
    )


@pytest.fixture
def app(settings, uow_factory):
    """Falcon ASGI app wired onto the in-memory UnitOfWork."""
    return build_falcon_app(
        settings, uow_factory, middleware=[CORSMiddleware(settings.cors_origin_list)]
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def auth(token_service):
    """Headers carrying a bearer token for an actor."""

    def _headers(actor: ActorContext) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_service.issue(actor.user)}"}

    return _headers

