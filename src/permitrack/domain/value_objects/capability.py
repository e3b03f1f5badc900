"""Capabilities gated by the role-permission matrix."""

from enum import StrEnum


class Capability(StrEnum):
    """Named boolean permissions. Values match the wire format."""

    CREATE_PERMITS = "canCreatePermits"
    EDIT_PERMITS = "canEditPermits"
    DELETE_PERMITS = "canDeletePermits"
    CLOSE_PERMITS = "canClosePermits"
    REOPEN_PERMITS = "canReopenPermits"
    VIEW_PERMITS = "canViewPermits"
    EXPORT_PERMITS = "canExportPermits"
    MANAGE_USERS = "canManageUsers"
    VIEW_STATISTICS = "canViewStatistics"
    VIEW_ACTIVITY_LOG = "canViewActivityLog"
    MANAGE_PERMISSIONS = "canManagePermissions"
    REOPEN_ANY_PERMIT = "canReopenAnyPermit"
