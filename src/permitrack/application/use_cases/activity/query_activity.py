"""Activity log query use cases."""

from permitrack.application.authorization import require_capability
from permitrack.application.dto.activity_dto import MAX_PAGE_SIZE, ActivityPage, ActivityQuery
from permitrack.application.dto.actor_context import ActorContext
from permitrack.application.ports import CapabilityResolver
from permitrack.domain.value_objects import Capability


class ListActivityUseCase:
    """Search the activity log, one page at a time."""

    def __init__(self, unit_of_work_factory: type, capability_resolver: CapabilityResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver

    async def execute(self, actor: ActorContext | None, query: ActivityQuery) -> ActivityPage:
        """Return entries newest first with the total matching count."""
        await require_capability(self._resolver, actor, Capability.VIEW_ACTIVITY_LOG)
        query.limit = min(max(query.limit, 1), MAX_PAGE_SIZE)
        query.offset = max(query.offset, 0)
        query.search = (query.search or "").strip() or None

        async with self._uow_factory() as uow:
            entries, total = await uow.activity_logs.search(query)

        return ActivityPage(entries=entries, total=total, limit=query.limit, offset=query.offset)


class ListActivityActionsUseCase:
    """Distinct actions ever recorded, for filter population."""

    def __init__(self, unit_of_work_factory: type, capability_resolver: CapabilityResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = capability_resolver

    async def execute(self, actor: ActorContext | None) -> list[str]:
        await require_capability(self._resolver, actor, Capability.VIEW_ACTIVITY_LOG)
        async with self._uow_factory() as uow:
            return await uow.activity_logs.list_actions()
