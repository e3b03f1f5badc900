"""Statistics use case."""

from datetime import timedelta

from permitrack.application.authorization import require_capability
from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.dto.statistics_dto import PermitStatistics
from permitrack.application.ports import CapabilityResolver
from permitrack.domain.value_objects import Capability

TREND_DAYS = 30
TOP_N = 10


class GetStatisticsUseCase:
    """Dashboard aggregates over all permits and users."""

    def __init__(
        self,
        unit_of_work_factory: type,
        capability_resolver: CapabilityResolver,
        clock: Clock = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver
        self._clock = clock

    async def execute(self, actor: ActorContext | None) -> PermitStatistics:
        await require_capability(self._resolver, actor, Capability.VIEW_STATISTICS)
        trend_since = self._clock().date() - timedelta(days=TREND_DAYS)
        async with self._uow_factory() as uow:
            return await uow.statistics.collect(trend_since, top_n=TOP_N)
