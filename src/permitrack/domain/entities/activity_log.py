"""Activity log entry - append-only audit record."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ActivityLogEntry:
    """One audited action. Never updated or deleted."""

    id: UUID
    actor_id: UUID | None
    actor_name: str
    actor_username: str
    action: str
    details: str
    timestamp: datetime
    source_ip: str = "unknown"
    user_agent: str = "unknown"
