"""Unit tests for tokens, authentication, login, registration and password reset."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from permitrack.application.dto.user_dto import UserCreateInput
from permitrack.application.use_cases.auth.authenticate import AuthenticateUseCase, parse_bearer
from permitrack.application.use_cases.auth.login import LoginUseCase
from permitrack.application.use_cases.auth.register import RegisterUseCase, ResetPasswordUseCase
from permitrack.domain.exceptions import AuthenticationError, ConflictError, ValidationError
from permitrack.domain.value_objects import Role
from permitrack.infrastructure.auth.jwt_token_service import JwtTokenService

from tests.conftest import TEST_JWT_SECRET, FakeUnitOfWork, make_user


def registration(**overrides) -> UserCreateInput:
    data = {
        "username": "newcomer",
        "password": "correct horse",
        "email": "newcomer@example.com",
        "first_name": "Nora",
        "last_name": "Haddad",
        "role": Role.ADMIN,
    }
    data.update(overrides)
    return UserCreateInput(**data)


# --- token service ---


def test_token_round_trip(token_service) -> None:
    user = make_user(Role.MANAGER, username="manager")

    claims = token_service.decode(token_service.issue(user))

    assert claims.user_id == user.id
    assert claims.username == "manager"
    assert claims.role == "manager"


def test_expired_token_rejected() -> None:
    service = JwtTokenService(secret=TEST_JWT_SECRET, expires_in=timedelta(seconds=-5))
    token = service.issue(make_user())
    with pytest.raises(AuthenticationError, match="Token expired"):
        service.decode(token)


def test_token_signed_with_other_secret_rejected(token_service) -> None:
    other = JwtTokenService(secret="another-secret-with-at-least-32-bytes")
    with pytest.raises(AuthenticationError, match="Invalid token"):
        token_service.decode(other.issue(make_user()))


def test_token_without_expiry_rejected(token_service) -> None:
    token = jwt.encode({"sub": str(uuid4())}, TEST_JWT_SECRET, algorithm="HS256")
    with pytest.raises(AuthenticationError, match="Invalid token"):
        token_service.decode(token)


def test_garbage_token_rejected(token_service) -> None:
    with pytest.raises(AuthenticationError, match="Invalid token"):
        token_service.decode("not-a-jwt")


@pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer ", "bearer abc"])
def test_parse_bearer_requires_bearer_token(header) -> None:
    with pytest.raises(AuthenticationError, match="Authentication required"):
        parse_bearer(header)


# --- authenticate ---


@pytest.mark.asyncio
async def test_authenticate_loads_current_user(
    uow_factory, token_service, fake_uow: FakeUnitOfWork
) -> None:
    user = fake_uow.users.add(make_user(Role.SECURITY_OFFICER, regions=["riyadh"]))
    token = token_service.issue(user)

    # Role changes after issue are seen on the next request.
    stored = await fake_uow.users.get_by_id(user.id)
    stored.role = Role.OBSERVER
    await fake_uow.users.update(stored)

    actor = await AuthenticateUseCase(uow_factory, token_service).execute(
        f"Bearer {token}", source_ip="192.0.2.1"
    )

    assert actor.user.id == user.id
    assert actor.user.role is Role.OBSERVER
    assert actor.source_ip == "192.0.2.1"
    assert actor.user_agent == "unknown"


@pytest.mark.asyncio
async def test_authenticate_deleted_user(uow_factory, token_service) -> None:
    token = token_service.issue(make_user())
    with pytest.raises(AuthenticationError, match="User no longer exists"):
        await AuthenticateUseCase(uow_factory, token_service).execute(f"Bearer {token}")


@pytest.mark.asyncio
async def test_authenticate_missing_header(uow_factory, token_service) -> None:
    with pytest.raises(AuthenticationError, match="Authentication required"):
        await AuthenticateUseCase(uow_factory, token_service).execute(None)


@pytest.mark.asyncio
async def test_authenticate_tampered_token(uow_factory, token_service, admin) -> None:
    token = token_service.issue(admin.user)
    with pytest.raises(AuthenticationError, match="Invalid token"):
        await AuthenticateUseCase(uow_factory, token_service).execute(f"Bearer {token}x")


# --- login ---


@pytest.fixture
def login(uow_factory, token_service, hasher, auditor, clock):
    return LoginUseCase(uow_factory, token_service, hasher, auditor, clock=clock)


@pytest.mark.asyncio
async def test_login_with_hashed_password(
    login, hasher, token_service, fake_uow: FakeUnitOfWork, clock
) -> None:
    user = fake_uow.users.add(
        make_user(Role.MANAGER, username="manager", password_hash=hasher.hash("s3cret-pass"))
    )

    result = await login.execute("manager", "s3cret-pass", source_ip="192.0.2.9", user_agent="ua")

    assert token_service.decode(result.token).user_id == user.id
    assert result.user.password_hash == ""
    assert fake_uow.users._by_id[user.id].last_login == clock.now
    entry = fake_uow.activity_logs.entries[-1]
    assert entry.action == "login"
    assert entry.details == "User manager logged in"
    assert entry.source_ip == "192.0.2.9"


@pytest.mark.asyncio
async def test_login_wrong_password(login, hasher, fake_uow: FakeUnitOfWork) -> None:
    fake_uow.users.add(make_user(username="manager", password_hash=hasher.hash("s3cret-pass")))
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        await login.execute("manager", "wrong-pass")
    assert fake_uow.activity_logs.entries == []


@pytest.mark.asyncio
async def test_login_unknown_user(login) -> None:
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        await login.execute("nobody", "whatever1")


@pytest.mark.asyncio
async def test_login_missing_password(login) -> None:
    with pytest.raises(ValidationError):
        await login.execute("manager", "")


@pytest.mark.asyncio
async def test_legacy_plaintext_password_upgraded(
    login, hasher, fake_uow: FakeUnitOfWork
) -> None:
    user = fake_uow.users.add(make_user(username="legacy", password_hash="plain-old-pass"))

    await login.execute("legacy", "plain-old-pass")

    stored = fake_uow.users._by_id[user.id].password_hash
    assert hasher.is_hash(stored)
    assert hasher.verify("plain-old-pass", stored)


@pytest.mark.asyncio
async def test_legacy_plaintext_refused_when_disabled(
    uow_factory, token_service, hasher, auditor, fake_uow: FakeUnitOfWork
) -> None:
    fake_uow.users.add(make_user(username="legacy", password_hash="plain-old-pass"))
    login = LoginUseCase(
        uow_factory, token_service, hasher, auditor, allow_legacy_plaintext=False
    )
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        await login.execute("legacy", "plain-old-pass")


# --- register / reset ---


@pytest.mark.asyncio
async def test_register_always_creates_observer(
    uow_factory, hasher, fake_uow: FakeUnitOfWork, clock
) -> None:
    user = await RegisterUseCase(uow_factory, hasher, clock=clock).execute(registration())

    assert user.role is Role.OBSERVER
    assert user.regions == ["headquarters"]
    assert user.password_hash == ""
    stored = await fake_uow.users.get_by_username("newcomer")
    assert hasher.verify("correct horse", stored.password_hash)
    assert fake_uow.activity_logs.entries == []


@pytest.mark.asyncio
async def test_register_duplicate_email(uow_factory, hasher, fake_uow: FakeUnitOfWork) -> None:
    fake_uow.users.add(make_user(username="someone"))
    with pytest.raises(ConflictError, match="Username or email already exists"):
        await RegisterUseCase(uow_factory, hasher).execute(
            registration(email="someone@example.com")
        )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"username": "ab"}, "Username must be at least 3 characters"),
        ({"password": "short"}, "password must be at least 8 characters"),
        ({"email": "not-an-email"}, "Valid email is required"),
        ({"first_name": " "}, "firstName is required"),
        ({"regions": ["atlantis"]}, "Unknown region"),
    ],
)
async def test_register_validation(uow_factory, hasher, overrides, message) -> None:
    with pytest.raises(ValidationError, match=message):
        await RegisterUseCase(uow_factory, hasher).execute(registration(**overrides))


@pytest.mark.asyncio
async def test_reset_password(uow_factory, hasher, fake_uow: FakeUnitOfWork) -> None:
    user = fake_uow.users.add(make_user(username="reset-me", password_hash=hasher.hash("old-pass-1")))

    await ResetPasswordUseCase(uow_factory, hasher).execute("reset-me", "old-pass-1", "new-pass-2")

    assert hasher.verify("new-pass-2", fake_uow.users._by_id[user.id].password_hash)


@pytest.mark.asyncio
async def test_reset_password_wrong_old(uow_factory, hasher, fake_uow: FakeUnitOfWork) -> None:
    fake_uow.users.add(make_user(username="reset-me", password_hash=hasher.hash("old-pass-1")))
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        await ResetPasswordUseCase(uow_factory, hasher).execute(
            "reset-me", "guess-pass", "new-pass-2"
        )


@pytest.mark.asyncio
async def test_reset_password_short_new(uow_factory, hasher) -> None:
    with pytest.raises(ValidationError, match="newPassword"):
        await ResetPasswordUseCase(uow_factory, hasher).execute("reset-me", "old-pass-1", "x")
