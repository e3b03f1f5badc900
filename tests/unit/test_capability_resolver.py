"""Unit tests for the role-permission matrix and resolver."""

import pytest

from permitrack.domain.entities import RolePermissions
from permitrack.domain.permission_matrix import DEFAULT_ROLE_CAPABILITIES, default_capabilities
from permitrack.domain.value_objects import Capability, Role

from tests.conftest import FakeUnitOfWork, make_user

# Rows of the default matrix: capability -> (admin, manager, security_officer, observer)
EXPECTED = {
    Capability.CREATE_PERMITS: (True, True, False, False),
    Capability.EDIT_PERMITS: (True, True, False, False),
    Capability.DELETE_PERMITS: (True, False, False, False),
    Capability.CLOSE_PERMITS: (True, True, True, False),
    Capability.REOPEN_PERMITS: (True, True, True, False),
    Capability.VIEW_PERMITS: (True, True, True, True),
    Capability.EXPORT_PERMITS: (True, True, False, False),
    Capability.MANAGE_USERS: (True, False, False, False),
    Capability.VIEW_STATISTICS: (True, True, False, False),
    Capability.VIEW_ACTIVITY_LOG: (True, True, True, False),
    Capability.MANAGE_PERMISSIONS: (True, False, False, False),
    Capability.REOPEN_ANY_PERMIT: (True, True, False, False),
}
ROLE_ORDER = (Role.ADMIN, Role.MANAGER, Role.SECURITY_OFFICER, Role.OBSERVER)


def test_default_matrix_matches_table() -> None:
    for index, role in enumerate(ROLE_ORDER):
        caps = default_capabilities(role)
        assert caps == {cap: row[index] for cap, row in EXPECTED.items()}


def test_every_role_has_defaults() -> None:
    assert set(DEFAULT_ROLE_CAPABILITIES) == set(Role)


def test_unknown_role_denies_everything() -> None:
    assert not any(default_capabilities("auditor").values())


@pytest.mark.asyncio
async def test_effective_without_override_equals_defaults(resolver) -> None:
    for role in Role:
        assert await resolver.effective(role) == default_capabilities(role)


@pytest.mark.asyncio
async def test_full_override_replaces_defaults(resolver, fake_uow: FakeUnitOfWork) -> None:
    override = {cap.value: cap is Capability.VIEW_PERMITS for cap in Capability}
    override[Capability.DELETE_PERMITS.value] = True
    await fake_uow.role_permissions.upsert(RolePermissions(role=Role.MANAGER, capabilities=override))

    effective = await resolver.effective(Role.MANAGER)

    assert effective[Capability.DELETE_PERMITS] is True
    assert effective[Capability.CREATE_PERMITS] is False
    assert effective[Capability.VIEW_PERMITS] is True


@pytest.mark.asyncio
async def test_partial_override_does_not_fall_back(resolver, fake_uow: FakeUnitOfWork) -> None:
    """Capabilities missing from an override are denied even if the default grants them."""
    await fake_uow.role_permissions.upsert(
        RolePermissions(role=Role.MANAGER, capabilities={"canViewPermits": True})
    )

    effective = await resolver.effective(Role.MANAGER)

    assert effective[Capability.VIEW_PERMITS] is True
    assert effective[Capability.CREATE_PERMITS] is False
    assert effective[Capability.REOPEN_ANY_PERMIT] is False
    assert sum(effective.values()) == 1


@pytest.mark.asyncio
async def test_override_only_affects_its_role(resolver, fake_uow: FakeUnitOfWork) -> None:
    await fake_uow.role_permissions.upsert(
        RolePermissions(role=Role.OBSERVER, capabilities={"canExportPermits": True})
    )
    assert await resolver.effective(Role.MANAGER) == default_capabilities(Role.MANAGER)


@pytest.mark.asyncio
async def test_non_boolean_override_value_is_denied(resolver, fake_uow: FakeUnitOfWork) -> None:
    await fake_uow.role_permissions.upsert(
        RolePermissions(role=Role.OBSERVER, capabilities={"canViewPermits": "yes"})
    )
    assert (await resolver.effective(Role.OBSERVER))[Capability.VIEW_PERMITS] is False


@pytest.mark.asyncio
async def test_check_uses_users_role(resolver) -> None:
    officer = make_user(Role.SECURITY_OFFICER)
    assert await resolver.check(officer, Capability.CLOSE_PERMITS) is True
    assert await resolver.check(officer, Capability.CREATE_PERMITS) is False


@pytest.mark.asyncio
async def test_unknown_role_string_is_denied(resolver) -> None:
    assert not any((await resolver.effective("superuser")).values())
