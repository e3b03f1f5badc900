"""Activity log query DTOs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from permitrack.domain.entities import ActivityLogEntry

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000


@dataclass
class ActivityQuery:
    """Filters and page window for activity log search."""

    search: str | None = None
    action: str | None = None
    date: date | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


@dataclass
class ActivityPage:
    """One page of entries plus the total matching the filters."""

    entries: list[ActivityLogEntry] = field(default_factory=list)
    total: int = 0
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0
