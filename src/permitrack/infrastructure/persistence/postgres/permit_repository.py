"""PostgreSQL permit repository implementation."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from permitrack.application.dto.permit_dto import PermitFilter
from permitrack.domain.entities import Material, Permit
from permitrack.domain.exceptions import ConflictError
from permitrack.domain.value_objects import RequestType

_COLUMNS = (
    "id, permit_number, date, region, location, carrier_name, carrier_id, request_type, "
    "vehicle_plate, created_by, created_at, closed_by, closed_at, closed_by_name, can_reopen"
)

DUPLICATE_PERMIT_NUMBER = "Permit number already exists"


def _row_to_permit(r: tuple, materials: list[Material]) -> Permit:
    return Permit(
        id=r[0],
        permit_number=r[1],
        date=r[2],
        region=r[3],
        location=r[4],
        carrier_name=r[5],
        carrier_id=r[6],
        request_type=RequestType(r[7]),
        vehicle_plate=r[8],
        created_by=r[9],
        created_at=r[10],
        closed_by=r[11],
        closed_at=r[12],
        closed_by_name=r[13],
        can_reopen=r[14],
        materials=materials,
    )


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresPermitRepository:
    """Permit repository implementation. Materials are stored in their own table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permit_id: UUID) -> Permit | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permit WHERE id = %s",
            (permit_id,),
        )
        r = await cur.fetchone()
        return await self._with_materials(r)

    async def list(self, permit_filter: PermitFilter) -> list[Permit]:
        """List permits newest first, filtered by region, date, search and allowed regions."""
        conditions = []
        params: list[object] = []
        if permit_filter.regions is not None:
            conditions.append("region = ANY(%s)")
            params.append(list(permit_filter.regions))
        if permit_filter.region:
            conditions.append("region = %s")
            params.append(permit_filter.region)
        if permit_filter.date:
            conditions.append("date = %s")
            params.append(permit_filter.date)
        if permit_filter.search:
            pattern = _like_pattern(permit_filter.search)
            conditions.append(
                "(permit_number ILIKE %s OR carrier_name ILIKE %s "
                "OR carrier_id ILIKE %s OR location ILIKE %s)"
            )
            params.extend([pattern] * 4)
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permit{where} ORDER BY created_at DESC",
            tuple(params),
        )
        rows = await cur.fetchall()
        materials = await self._materials_for([r[0] for r in rows])
        return [_row_to_permit(r, materials.get(r[0], [])) for r in rows]

    async def create(self, permit: Permit) -> Permit:
        """Create permit and its materials. Duplicate number raises ConflictError."""
        try:
            await self._conn.execute(
                f"INSERT INTO permit ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    permit.id,
                    permit.permit_number,
                    permit.date,
                    permit.region,
                    permit.location,
                    permit.carrier_name,
                    permit.carrier_id,
                    permit.request_type.value,
                    permit.vehicle_plate,
                    permit.created_by,
                    permit.created_at,
                    permit.closed_by,
                    permit.closed_at,
                    permit.closed_by_name,
                    permit.can_reopen,
                ),
            )
        except UniqueViolation as e:
            raise ConflictError(DUPLICATE_PERMIT_NUMBER) from e
        await self._insert_materials(permit.id, permit.materials)
        return permit

    async def update_if_open(self, permit: Permit) -> Permit | None:
        """Update fields and materials unless the permit was closed meanwhile."""
        try:
            cur = await self._conn.execute(
                "UPDATE permit SET permit_number=%s, date=%s, region=%s, location=%s, "
                "carrier_name=%s, carrier_id=%s, request_type=%s, vehicle_plate=%s "
                f"WHERE id=%s AND closed_at IS NULL RETURNING {_COLUMNS}",
                (
                    permit.permit_number,
                    permit.date,
                    permit.region,
                    permit.location,
                    permit.carrier_name,
                    permit.carrier_id,
                    permit.request_type.value,
                    permit.vehicle_plate,
                    permit.id,
                ),
            )
        except UniqueViolation as e:
            raise ConflictError(DUPLICATE_PERMIT_NUMBER) from e
        r = await cur.fetchone()
        if not r:
            return None
        await self._conn.execute("DELETE FROM material WHERE permit_id = %s", (permit.id,))
        await self._insert_materials(permit.id, permit.materials)
        return _row_to_permit(r, list(permit.materials))

    async def close_if_open(
        self, permit_id: UUID, closed_by: UUID, closed_by_name: str, closed_at: datetime
    ) -> Permit | None:
        cur = await self._conn.execute(
            "UPDATE permit SET closed_by=%s, closed_by_name=%s, closed_at=%s, can_reopen=TRUE "
            f"WHERE id=%s AND closed_at IS NULL RETURNING {_COLUMNS}",
            (closed_by, closed_by_name, closed_at, permit_id),
        )
        return await self._with_materials(await cur.fetchone())

    async def reopen_if_closed_at(self, permit_id: UUID, closed_at: datetime) -> Permit | None:
        """Reopen only if the permit is still closed with the observed closed_at."""
        cur = await self._conn.execute(
            "UPDATE permit SET closed_by=NULL, closed_by_name=NULL, closed_at=NULL, "
            f"can_reopen=TRUE WHERE id=%s AND closed_at = %s RETURNING {_COLUMNS}",
            (permit_id, closed_at),
        )
        return await self._with_materials(await cur.fetchone())

    async def delete(self, permit_id: UUID) -> bool:
        """Delete permit; materials go with it via ON DELETE CASCADE."""
        cur = await self._conn.execute("DELETE FROM permit WHERE id = %s", (permit_id,))
        return cur.rowcount > 0

    async def _with_materials(self, r: tuple | None) -> Permit | None:
        if not r:
            return None
        materials = await self._materials_for([r[0]])
        return _row_to_permit(r, materials.get(r[0], []))

    async def _materials_for(self, permit_ids: list[UUID]) -> dict[UUID, list[Material]]:
        if not permit_ids:
            return {}
        cur = await self._conn.execute(
            "SELECT permit_id, material_id, description, serial_number FROM material "
            "WHERE permit_id = ANY(%s) ORDER BY permit_id, position",
            (permit_ids,),
        )
        result: dict[UUID, list[Material]] = {}
        for r in await cur.fetchall():
            result.setdefault(r[0], []).append(
                Material(id=r[1], description=r[2], serial_number=r[3])
            )
        return result

    async def _insert_materials(self, permit_id: UUID, materials: list[Material]) -> None:
        if not materials:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO material (permit_id, position, material_id, description, serial_number) "
                "VALUES (%s, %s, %s, %s, %s)",
                [
                    (permit_id, position, m.id, m.description, m.serial_number)
                    for position, m in enumerate(materials)
                ],
            )
