"""PostgreSQL statistics repository implementation."""

from datetime import date

from psycopg import AsyncConnection

from permitrack.application.dto.statistics_dto import NamedCount, PermitStatistics


class PostgresStatisticsRepository:
    """Aggregate queries for the statistics dashboard."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def collect(self, trend_since: date, top_n: int = 10) -> PermitStatistics:
        cur = await self._conn.execute(
            "SELECT count(*), count(*) FILTER (WHERE closed_at IS NULL), "
            "count(*) FILTER (WHERE closed_at IS NOT NULL) FROM permit"
        )
        total, active, closed = await cur.fetchone()
        cur = await self._conn.execute("SELECT count(*) FROM app_user")
        total_users = (await cur.fetchone())[0]

        return PermitStatistics(
            total_permits=total,
            active_permits=active,
            closed_permits=closed,
            total_users=total_users,
            permits_by_region=await self._counts(
                "SELECT region, count(*) FROM permit GROUP BY region ORDER BY region"
            ),
            permits_by_type=await self._counts(
                "SELECT request_type, count(*) FROM permit GROUP BY request_type ORDER BY request_type"
            ),
            permits_trend={
                day.isoformat(): n
                for day, n in await self._rows(
                    "SELECT date, count(*) FROM permit WHERE date >= %s GROUP BY date ORDER BY date",
                    (trend_since,),
                )
            },
            top_carriers=await self._top(
                "SELECT carrier_name, count(*) AS n FROM permit GROUP BY carrier_name "
                "ORDER BY n DESC, carrier_name LIMIT %s",
                top_n,
            ),
            top_closers=await self._top(
                "SELECT closed_by_name, count(*) AS n FROM permit WHERE closed_by_name IS NOT NULL "
                "GROUP BY closed_by_name ORDER BY n DESC, closed_by_name LIMIT %s",
                top_n,
            ),
            top_creators=await self._top(
                "SELECT coalesce(u.first_name || ' ' || u.last_name, 'Unknown') AS name, "
                "count(*) AS n FROM permit p LEFT JOIN app_user u ON u.id = p.created_by "
                "GROUP BY name ORDER BY n DESC, name LIMIT %s",
                top_n,
            ),
        )

    async def _rows(self, query: str, params: tuple = ()) -> list[tuple]:
        cur = await self._conn.execute(query, params)
        return await cur.fetchall()

    async def _counts(self, query: str) -> dict[str, int]:
        return {r[0]: r[1] for r in await self._rows(query)}

    async def _top(self, query: str, top_n: int) -> list[NamedCount]:
        return [NamedCount(name=r[0], count=r[1]) for r in await self._rows(query, (top_n,))]
