"""Statistics DTOs."""

from dataclasses import dataclass, field


@dataclass
class NamedCount:
    name: str
    count: int


@dataclass
class PermitStatistics:
    """Aggregate counts over permits and users."""

    total_permits: int = 0
    active_permits: int = 0
    closed_permits: int = 0
    total_users: int = 0
    permits_by_region: dict[str, int] = field(default_factory=dict)
    permits_by_type: dict[str, int] = field(default_factory=dict)
    permits_trend: dict[str, int] = field(default_factory=dict)
    top_carriers: list[NamedCount] = field(default_factory=list)
    top_closers: list[NamedCount] = field(default_factory=list)
    top_creators: list[NamedCount] = field(default_factory=list)
