"""Compiled-in role-permission matrix."""

from permitrack.domain.value_objects import Capability, Role

DEFAULT_ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.MANAGER: frozenset(
        {
            Capability.CREATE_PERMITS,
            Capability.EDIT_PERMITS,
            Capability.CLOSE_PERMITS,
            Capability.REOPEN_PERMITS,
            Capability.VIEW_PERMITS,
            Capability.EXPORT_PERMITS,
            Capability.VIEW_STATISTICS,
            Capability.VIEW_ACTIVITY_LOG,
            Capability.REOPEN_ANY_PERMIT,
        }
    ),
    Role.SECURITY_OFFICER: frozenset(
        {
            Capability.CLOSE_PERMITS,
            Capability.REOPEN_PERMITS,
            Capability.VIEW_PERMITS,
            Capability.VIEW_ACTIVITY_LOG,
        }
    ),
    Role.OBSERVER: frozenset({Capability.VIEW_PERMITS}),
}


def parse_role(value: str) -> Role | None:
    """Return the Role for value, or None if it names no known role."""
    try:
        return Role(value)
    except ValueError:
        return None


def default_capabilities(role: Role | str) -> dict[Capability, bool]:
    """Full capability map for role from the default matrix.

    Unknown roles get every capability denied.
    """
    parsed = parse_role(role)
    granted = DEFAULT_ROLE_CAPABILITIES.get(parsed, frozenset()) if parsed else frozenset()
    return {cap: cap in granted for cap in Capability}


def denied_capabilities() -> dict[Capability, bool]:
    """Capability map with everything denied."""
    return {cap: False for cap in Capability}
