"""Statistics repository port."""

from datetime import date
from typing import Protocol

from permitrack.application.dto.statistics_dto import PermitStatistics


class StatisticsRepository(Protocol):
    """Port for aggregate permit and user counts."""

    async def collect(self, trend_since: date, top_n: int = 10) -> PermitStatistics: ...
