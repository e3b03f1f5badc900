"""Activity auditor - best-effort append to the activity log."""

import logging
from uuid import uuid4

from permitrack.application.clock import Clock, utc_now
from permitrack.application.dto.actor_context import ActorContext
from permitrack.domain.entities import ActivityLogEntry
from permitrack.domain.value_objects import ActivityAction

logger = logging.getLogger(__name__)


class ActivityAuditor:
    """Record one activity entry per successful mutation.

    Runs in its own unit of work after the mutation has committed. A failed
    write is logged as a warning and never reaches the caller.
    """

    def __init__(self, unit_of_work_factory: type, clock: Clock = utc_now) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def record(
        self, actor: ActorContext, action: ActivityAction, details: str
    ) -> ActivityLogEntry | None:
        """Append entry; return it, or None if the write failed."""
        entry = ActivityLogEntry(
            id=uuid4(),
            actor_id=actor.user.id,
            actor_name=actor.user.display_name,
            actor_username=actor.user.username,
            action=action.value,
            details=details,
            timestamp=self._clock(),
            source_ip=actor.source_ip,
            user_agent=actor.user_agent,
        )
        try:
            async with self._uow_factory() as uow:
                await uow.activity_logs.append(entry)
        except Exception:
            logger.warning(
                "Failed to record activity %s (%s) for %s",
                entry.action,
                entry.details,
                entry.actor_username,
                exc_info=True,
            )
            return None
        return entry
