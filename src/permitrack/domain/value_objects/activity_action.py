"""Activity log action tags."""

from enum import StrEnum


class ActivityAction(StrEnum):
    """Actions recorded in the activity log."""

    CREATE_PERMIT = "create_permit"
    UPDATE_PERMIT = "update_permit"
    CLOSE_PERMIT = "close_permit"
    REOPEN_PERMIT = "reopen_permit"
    DELETE_PERMIT = "delete_permit"
    EXPORT_PERMITS = "export_permits"
    LOGIN = "login"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
