"""Role permissions repository port."""

from typing import Protocol

from permitrack.domain.entities import RolePermissions


class RolePermissionsRepository(Protocol):
    """Port for role capability overrides."""

    async def get(self, role: str) -> RolePermissions | None: ...

    async def list_all(self) -> list[RolePermissions]: ...

    async def upsert(self, role_permissions: RolePermissions) -> RolePermissions: ...

    async def delete(self, role: str) -> bool: ...
