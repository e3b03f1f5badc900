"""PostgreSQL activity log repository implementation."""

from datetime import UTC, datetime, time, timedelta

from psycopg import AsyncConnection

from permitrack.application.dto.activity_dto import ActivityQuery
from permitrack.domain.entities import ActivityLogEntry

_COLUMNS = (
    "id, actor_id, actor_name, actor_username, action, details, timestamp, source_ip, user_agent"
)


def _row_to_entry(r: tuple) -> ActivityLogEntry:
    return ActivityLogEntry(
        id=r[0],
        actor_id=r[1],
        actor_name=r[2],
        actor_username=r[3],
        action=r[4],
        details=r[5],
        timestamp=r[6],
        source_ip=r[7],
        user_agent=r[8],
    )


def _where(query: ActivityQuery) -> tuple[str, list[object]]:
    conditions = []
    params: list[object] = []
    if query.search:
        escaped = query.search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        conditions.append("(actor_name ILIKE %s OR actor_username ILIKE %s OR details ILIKE %s)")
        params.extend([pattern] * 3)
    if query.action:
        conditions.append("action = %s")
        params.append(query.action)
    if query.date:
        start = datetime.combine(query.date, time.min, tzinfo=UTC)
        conditions.append("timestamp >= %s AND timestamp < %s")
        params.extend([start, start + timedelta(days=1)])
    where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
    return where, params


class PostgresActivityLogRepository:
    """Append-only activity log. There is no update or delete."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def append(self, entry: ActivityLogEntry) -> None:
        await self._conn.execute(
            f"INSERT INTO activity_log ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.actor_id,
                entry.actor_name,
                entry.actor_username,
                entry.action,
                entry.details,
                entry.timestamp,
                entry.source_ip,
                entry.user_agent,
            ),
        )

    async def search(self, query: ActivityQuery) -> tuple[list[ActivityLogEntry], int]:
        """Page of entries newest first, plus the total ignoring limit and offset."""
        where, params = _where(query)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM activity_log{where} "
            "ORDER BY timestamp DESC LIMIT %s OFFSET %s",
            tuple(params) + (query.limit, query.offset),
        )
        rows = await cur.fetchall()
        cur = await self._conn.execute(f"SELECT count(*) FROM activity_log{where}", tuple(params))
        total = (await cur.fetchone())[0]
        return [_row_to_entry(r) for r in rows], total

    async def list_actions(self) -> list[str]:
        cur = await self._conn.execute("SELECT DISTINCT action FROM activity_log ORDER BY action")
        return [r[0] for r in await cur.fetchall()]
