"""Pytest fixtures for Permitrack tests."""

from __future__ import annotations

import asyncio
import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from permitrack.application.dto.activity_dto import ActivityQuery
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.permit_dto import PermitCreateInput, PermitFilter
from permitrack.application.dto.statistics_dto import NamedCount, PermitStatistics
from permitrack.application.use_cases.activity.record_activity import ActivityAuditor
from permitrack.domain.entities import ActivityLogEntry, Material, Permit, RolePermissions, User
from permitrack.domain.exceptions import ConflictError
from permitrack.domain.value_objects import RequestType, Role
from permitrack.infrastructure.auth.bcrypt_hasher import BcryptPasswordHasher
from permitrack.infrastructure.auth.jwt_token_service import JwtTokenService
from permitrack.infrastructure.permission.capability_resolver import MatrixCapabilityResolver

TEST_JWT_SECRET = "test-secret-with-at-least-32-bytes!!"
NOW = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


# --- Fake repositories ---
# Entities are copied in and out so callers cannot mutate stored state,
# the way rows behave in a real database.


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}

    async def get_by_id(self, user_id: UUID) -> User | None:
        user = self._by_id.get(user_id)
        return copy.deepcopy(user) if user else None

    async def get_by_username(self, username: str) -> User | None:
        for user in self._by_id.values():
            if user.username == username:
                return copy.deepcopy(user)
        return None

    async def find_conflicting(
        self, username: str | None, email: str | None, exclude_id: UUID | None = None
    ) -> User | None:
        for user in self._by_id.values():
            if user.id == exclude_id:
                continue
            if (username and user.username == username) or (email and user.email == email):
                return copy.deepcopy(user)
        return None

    async def list_all(self) -> list[User]:
        users = sorted(self._by_id.values(), key=lambda u: u.created_at, reverse=True)
        return [copy.deepcopy(u) for u in users]

    async def count(self) -> int:
        return len(self._by_id)

    async def create(self, user: User) -> User:
        if await self.find_conflicting(user.username, user.email):
            raise ConflictError("Username or email already exists")
        self._by_id[user.id] = copy.deepcopy(user)
        return user

    async def update(self, user: User) -> None:
        self._by_id[user.id] = copy.deepcopy(user)

    async def set_password_hash(self, user_id: UUID, password_hash: str) -> None:
        self._by_id[user_id].password_hash = password_hash

    async def set_last_login(self, user_id: UUID, when: datetime) -> None:
        self._by_id[user_id].last_login = when

    async def delete(self, user_id: UUID) -> bool:
        return self._by_id.pop(user_id, None) is not None

    def add(self, user: User) -> User:
        """Helper to seed a user for tests."""
        self._by_id[user.id] = copy.deepcopy(user)
        return user


class FakePermitRepository:
    """In-memory permit repository.

    Reads yield to the event loop first, so concurrent use cases interleave
    between their read and their conditional write.
    """

    def __init__(self) -> None:
        self._by_id: dict[UUID, Permit] = {}

    async def get_by_id(self, permit_id: UUID) -> Permit | None:
        await asyncio.sleep(0)
        permit = self._by_id.get(permit_id)
        return copy.deepcopy(permit) if permit else None

    async def list(self, permit_filter: PermitFilter) -> list[Permit]:
        items = list(self._by_id.values())
        if permit_filter.regions is not None:
            items = [p for p in items if p.region in permit_filter.regions]
        if permit_filter.region:
            items = [p for p in items if p.region == permit_filter.region]
        if permit_filter.date:
            items = [p for p in items if p.date == permit_filter.date]
        if permit_filter.search:
            needle = permit_filter.search.lower()
            items = [
                p
                for p in items
                if any(
                    needle in field.lower()
                    for field in (p.permit_number, p.carrier_name, p.carrier_id, p.location)
                )
            ]
        items.sort(key=lambda p: p.created_at, reverse=True)
        return [copy.deepcopy(p) for p in items]

    async def create(self, permit: Permit) -> Permit:
        if any(p.permit_number == permit.permit_number for p in self._by_id.values()):
            raise ConflictError("Permit number already exists")
        self._by_id[permit.id] = copy.deepcopy(permit)
        return permit

    async def update_if_open(self, permit: Permit) -> Permit | None:
        current = self._by_id.get(permit.id)
        if not current or current.is_closed:
            return None
        if any(
            p.permit_number == permit.permit_number and p.id != permit.id
            for p in self._by_id.values()
        ):
            raise ConflictError("Permit number already exists")
        self._by_id[permit.id] = copy.deepcopy(permit)
        return copy.deepcopy(permit)

    async def close_if_open(
        self, permit_id: UUID, closed_by: UUID, closed_by_name: str, closed_at: datetime
    ) -> Permit | None:
        current = self._by_id.get(permit_id)
        if not current or current.is_closed:
            return None
        current.closed_by = closed_by
        current.closed_by_name = closed_by_name
        current.closed_at = closed_at
        current.can_reopen = True
        return copy.deepcopy(current)

    async def reopen_if_closed_at(self, permit_id: UUID, closed_at: datetime) -> Permit | None:
        current = self._by_id.get(permit_id)
        if not current or current.closed_at != closed_at:
            return None
        current.closed_by = None
        current.closed_by_name = None
        current.closed_at = None
        current.can_reopen = True
        return copy.deepcopy(current)

    async def delete(self, permit_id: UUID) -> bool:
        return self._by_id.pop(permit_id, None) is not None

    def add(self, permit: Permit) -> Permit:
        """Helper to seed a permit for tests."""
        self._by_id[permit.id] = copy.deepcopy(permit)
        return permit

    def stored(self, permit_id: UUID) -> Permit | None:
        return self._by_id.get(permit_id)


class FakeRolePermissionsRepository:
    """In-memory role permissions repository."""

    def __init__(self) -> None:
        self._by_role: dict[str, RolePermissions] = {}

    async def get(self, role: str) -> RolePermissions | None:
        return self._by_role.get(role)

    async def list_all(self) -> list[RolePermissions]:
        return list(self._by_role.values())

    async def upsert(self, role_permissions: RolePermissions) -> RolePermissions:
        self._by_role[role_permissions.role.value] = role_permissions
        return role_permissions

    async def delete(self, role: str) -> bool:
        return self._by_role.pop(role, None) is not None


class FakeActivityLogRepository:
    """In-memory activity log. Set ``fail`` to simulate a broken store."""

    def __init__(self) -> None:
        self.entries: list[ActivityLogEntry] = []
        self.fail = False

    async def append(self, entry: ActivityLogEntry) -> None:
        if self.fail:
            raise RuntimeError("activity store unavailable")
        self.entries.append(entry)

    async def search(self, query: ActivityQuery) -> tuple[list[ActivityLogEntry], int]:
        items = list(self.entries)
        if query.search:
            needle = query.search.lower()
            items = [
                e
                for e in items
                if needle in e.actor_name.lower()
                or needle in e.actor_username.lower()
                or needle in e.details.lower()
            ]
        if query.action:
            items = [e for e in items if e.action == query.action]
        if query.date:
            items = [e for e in items if e.timestamp.astimezone(UTC).date() == query.date]
        items.sort(key=lambda e: e.timestamp, reverse=True)
        return items[query.offset : query.offset + query.limit], len(items)

    async def list_actions(self) -> list[str]:
        return sorted({e.action for e in self.entries})


class FakeStatisticsRepository:
    """Computes statistics from the fake permit and user repositories."""

    def __init__(self, permits: FakePermitRepository, users: FakeUserRepository) -> None:
        self._permits = permits
        self._users = users

    async def collect(self, trend_since: date, top_n: int = 10) -> PermitStatistics:
        permits = list(self._permits._by_id.values())
        users = self._users._by_id

        def counts(values: list[str]) -> dict[str, int]:
            result: dict[str, int] = {}
            for v in values:
                result[v] = result.get(v, 0) + 1
            return result

        def top(values: list[str]) -> list[NamedCount]:
            ranked = sorted(counts(values).items(), key=lambda kv: (-kv[1], kv[0]))
            return [NamedCount(name=k, count=v) for k, v in ranked[:top_n]]

        creators = [
            users[p.created_by].display_name if p.created_by in users else "Unknown"
            for p in permits
        ]
        return PermitStatistics(
            total_permits=len(permits),
            active_permits=sum(1 for p in permits if not p.is_closed),
            closed_permits=sum(1 for p in permits if p.is_closed),
            total_users=len(users),
            permits_by_region=counts([p.region for p in permits]),
            permits_by_type=counts([p.request_type.value for p in permits]),
            permits_trend=counts([p.date.isoformat() for p in permits if p.date >= trend_since]),
            top_carriers=top([p.carrier_name for p in permits]),
            top_closers=top([p.closed_by_name for p in permits if p.closed_by_name]),
            top_creators=top(creators),
        )


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.permits = FakePermitRepository()
        self.role_permissions = FakeRolePermissionsRepository()
        self.activity_logs = FakeActivityLogRepository()
        self.statistics = FakeStatisticsRepository(self.permits, self.users)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


class FakeClock:
    """Settable UTC clock."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


# --- Builders ---


def make_user(
    role: Role = Role.ADMIN,
    regions: list[str] | None = None,
    username: str | None = None,
    password_hash: str = "$2b$04$placeholderplaceholderplaceholderplaceholde",
    first_name: str = "Test",
    last_name: str = "User",
) -> User:
    username = username or f"{role.value}-{uuid4().hex[:6]}"
    return User(
        id=uuid4(),
        username=username,
        password_hash=password_hash,
        email=f"{username}@example.com",
        first_name=first_name,
        last_name=last_name,
        role=role,
        regions=regions if regions is not None else ["headquarters"],
        created_at=NOW,
    )


def actor_for(user: User) -> ActorContext:
    return ActorContext(user=user, source_ip="10.0.0.7", user_agent="pytest")


def permit_input(
    permit_number: str = "MHV0000001",
    region: str = "riyadh",
    request_type: RequestType = RequestType.MATERIAL_ENTRANCE,
    materials: list[Material] | None = None,
    vehicle_plate: str = "",
) -> PermitCreateInput:
    return PermitCreateInput(
        permit_number=permit_number,
        date=date(2026, 3, 1),
        region=region,
        location="Gate 3",
        carrier_name="Acme Haulage",
        carrier_id="CR-2291",
        request_type=request_type,
        vehicle_plate=vehicle_plate,
        materials=materials
        if materials is not None
        else [Material(id="1", description="Transformer", serial_number="TX-100")],
    )


def permit_body(**overrides) -> dict:
    """Wire-format create body matching permit_input()."""
    body = {
        "permitNumber": "MHV0000001",
        "date": "2026-03-01",
        "region": "riyadh",
        "location": "Gate 3",
        "carrierName": "Acme Haulage",
        "carrierId": "CR-2291",
        "requestType": "material_entrance",
        "vehiclePlate": "",
        "materials": [{"id": "1", "description": "Transformer", "serialNumber": "TX-100"}],
    }
    body.update(overrides)
    return body


def make_permit(
    region: str = "riyadh",
    permit_number: str | None = None,
    closed_by: UUID | None = None,
    closed_at: datetime | None = None,
    created_by: UUID | None = None,
    created_at: datetime = NOW,
    carrier_name: str = "Acme Haulage",
) -> Permit:
    return Permit(
        id=uuid4(),
        permit_number=permit_number or f"ABC{uuid4().int % 10**7:07d}",
        date=date(2026, 3, 1),
        region=region,
        location="Gate 3",
        carrier_name=carrier_name,
        carrier_id="CR-2291",
        request_type=RequestType.MATERIAL_ENTRANCE,
        vehicle_plate="N/A",
        created_at=created_at,
        created_by=created_by,
        materials=[Material(id="1", description="Transformer", serial_number="TX-100")],
        closed_by=closed_by,
        closed_at=closed_at,
        closed_by_name="Test User [closer]" if closed_by else None,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Shared in-memory UnitOfWork for one test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the shared FakeUnitOfWork."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield fake_uow

    return _factory


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def resolver(uow_factory) -> MatrixCapabilityResolver:
    return MatrixCapabilityResolver(uow_factory)


@pytest.fixture
def auditor(uow_factory, clock: FakeClock) -> ActivityAuditor:
    return ActivityAuditor(uow_factory, clock=clock)


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    """Low-cost hasher to keep tests fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def token_service() -> JwtTokenService:
    return JwtTokenService(secret=TEST_JWT_SECRET)


@pytest.fixture
def admin(fake_uow: FakeUnitOfWork) -> ActorContext:
    return actor_for(fake_uow.users.add(make_user(Role.ADMIN, username="admin")))


@pytest.fixture
def manager(fake_uow: FakeUnitOfWork) -> ActorContext:
    return actor_for(fake_uow.users.add(make_user(Role.MANAGER, username="manager")))


@pytest.fixture
def officer(fake_uow: FakeUnitOfWork) -> ActorContext:
    """Security officer assigned to riyadh only."""
    return actor_for(
        fake_uow.users.add(
            make_user(
                Role.SECURITY_OFFICER,
                regions=["riyadh"],
                username="officer",
                first_name="Omar",
                last_name="Saleh",
            )
        )
    )


@pytest.fixture
def observer(fake_uow: FakeUnitOfWork) -> ActorContext:
    """Observer assigned to headquarters only."""
    return actor_for(
        fake_uow.users.add(make_user(Role.OBSERVER, regions=["headquarters"], username="observer"))
    )
