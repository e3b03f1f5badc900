"""Human-readable activity details.

Details embed the permit number or the target username in a fixed
"<Verb> permit <NUMBER>" / "<Verb> user <username>" form so presentation
code can pull them back out with extract_permit_number / extract_username.
"""

import re

from permitrack.domain.value_objects import ActivityAction

_PERMIT_VERBS: dict[ActivityAction, str] = {
    ActivityAction.CREATE_PERMIT: "Created",
    ActivityAction.UPDATE_PERMIT: "Updated",
    ActivityAction.CLOSE_PERMIT: "Closed",
    ActivityAction.REOPEN_PERMIT: "Reopened",
    ActivityAction.DELETE_PERMIT: "Deleted",
}

_USER_VERBS: dict[ActivityAction, str] = {
    ActivityAction.CREATE_USER: "Created",
    ActivityAction.UPDATE_USER: "Updated",
    ActivityAction.DELETE_USER: "Deleted",
}


def _verbs(verbs: dict[ActivityAction, str]) -> str:
    return "|".join(sorted(set(verbs.values())))


_PERMIT_NUMBER = re.compile(
    rf"^(?:{_verbs(_PERMIT_VERBS)}) permit ([A-Z0-9]+)(?: for .*)?$", re.DOTALL
)
_USERNAME = re.compile(rf"^(?:(?:{_verbs(_USER_VERBS)}) user (\S+)|User (\S+) logged in)$")


def permit_details(action: ActivityAction, permit_number: str, carrier_name: str | None = None) -> str:
    """Details line for a permit action."""
    details = f"{_PERMIT_VERBS[action]} permit {permit_number}"
    if carrier_name:
        details += f" for {carrier_name}"
    return details


def user_details(action: ActivityAction, username: str) -> str:
    """Details line for a user-management action."""
    return f"{_USER_VERBS[action]} user {username}"


def login_details(username: str) -> str:
    return f"User {username} logged in"


def export_details(count: int) -> str:
    return f"Exported {count} permits"


def extract_permit_number(details: str) -> str | None:
    match = _PERMIT_NUMBER.match(details)
    return match.group(1) if match else None


def extract_username(details: str) -> str | None:
    match = _USERNAME.match(details)
    if not match:
        return None
    return match.group(1) or match.group(2)
