"""Domain value objects."""

from permitrack.domain.value_objects.activity_action import ActivityAction
from permitrack.domain.value_objects.capability import Capability
from permitrack.domain.value_objects.permit_state import PermitState
from permitrack.domain.value_objects.region import REGIONS
from permitrack.domain.value_objects.request_type import RequestType
from permitrack.domain.value_objects.role import Role

__all__ = [
    "REGIONS",
    "ActivityAction",
    "Capability",
    "PermitState",
    "RequestType",
    "Role",
]
