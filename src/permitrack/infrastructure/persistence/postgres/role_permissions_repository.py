"""PostgreSQL role permissions repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from permitrack.domain.entities import RolePermissions
from permitrack.domain.value_objects import Role


def _row_to_role_permissions(r: tuple) -> RolePermissions:
    return RolePermissions(role=Role(r[0]), capabilities=dict(r[1] or {}), updated_at=r[2])


class PostgresRolePermissionsRepository:
    """Role permissions override repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, role: str) -> RolePermissions | None:
        cur = await self._conn.execute(
            "SELECT role, capabilities, updated_at FROM role_permissions WHERE role = %s",
            (role,),
        )
        r = await cur.fetchone()
        return _row_to_role_permissions(r) if r else None

    async def list_all(self) -> list[RolePermissions]:
        cur = await self._conn.execute(
            "SELECT role, capabilities, updated_at FROM role_permissions ORDER BY role",
        )
        rows = await cur.fetchall()
        return [_row_to_role_permissions(r) for r in rows]

    async def upsert(self, role_permissions: RolePermissions) -> RolePermissions:
        await self._conn.execute(
            "INSERT INTO role_permissions (role, capabilities, updated_at) VALUES (%s, %s, %s) "
            "ON CONFLICT (role) DO UPDATE SET capabilities = EXCLUDED.capabilities, "
            "updated_at = EXCLUDED.updated_at",
            (
                role_permissions.role.value,
                Jsonb(role_permissions.capabilities),
                role_permissions.updated_at,
            ),
        )
        return role_permissions

    async def delete(self, role: str) -> bool:
        cur = await self._conn.execute("DELETE FROM role_permissions WHERE role = %s", (role,))
        return cur.rowcount > 0
