"""Permit lifecycle state."""

from enum import StrEnum


class PermitState(StrEnum):
    """A permit is open until closed; closing can be undone."""

    OPEN = "open"
    CLOSED = "closed"
