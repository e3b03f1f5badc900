"""Input validation shared by use cases and API resources.

Every failure raises ValidationError with a message naming the field.
"""

import re
from datetime import date
from typing import Any

from permitrack.domain.entities import Material
from permitrack.domain.exceptions import ValidationError
from permitrack.domain.value_objects import REGIONS, RequestType, Role

PERMIT_NUMBER_PATTERN = re.compile(r"^[A-Z]{3}\d+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8


def require_text(value: Any, field_name: str) -> str:
    """Return value stripped; reject missing, non-string or blank values."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def validate_permit_number(value: str) -> str:
    if not PERMIT_NUMBER_PATTERN.match(value):
        raise ValidationError("permitNumber must be 3 uppercase letters followed by digits")
    return value


def validate_region(value: str) -> str:
    if value not in REGIONS:
        raise ValidationError(f"Unknown region: {value}")
    return value


def validate_regions(values: Any) -> list[str]:
    """Non-empty list of known regions, duplicates dropped, order kept."""
    if not isinstance(values, list) or not values:
        raise ValidationError("region must be a non-empty list")
    regions: list[str] = []
    for value in values:
        region = validate_region(require_text(value, "region"))
        if region not in regions:
            regions.append(region)
    return regions


def parse_date(value: Any, field_name: str = "date") -> date:
    """Parse an ISO-8601 date; datetimes are truncated to their date part."""
    text = require_text(value, field_name)
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO-8601 date") from None


def parse_request_type(value: Any) -> RequestType:
    text = require_text(value, "requestType")
    try:
        return RequestType(text)
    except ValueError:
        raise ValidationError(f"Unknown requestType: {text}") from None


def parse_role(value: Any) -> Role:
    text = require_text(value, "role")
    try:
        return Role(text)
    except ValueError:
        raise ValidationError(f"Unknown role: {text}") from None


def parse_materials(value: Any) -> list[Material]:
    """Materials from their wire form [{id, description, serialNumber}]."""
    if not isinstance(value, list):
        raise ValidationError("materials must be a list")
    materials = []
    for index, item in enumerate(value, start=1):
        if not isinstance(item, dict):
            raise ValidationError("materials must contain objects")
        materials.append(
            Material(
                id=str(item.get("id") or index),
                description=require_text(item.get("description"), "materials.description"),
                serial_number=require_text(item.get("serialNumber"), "materials.serialNumber"),
            )
        )
    return materials


def validate_username(value: Any) -> str:
    username = require_text(value, "username")
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
    return username


def validate_password(value: Any, field_name: str = "password") -> str:
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"{field_name} must be at least {MIN_PASSWORD_LENGTH} characters")
    return value


def validate_email(value: Any) -> str:
    email = require_text(value, "email")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Valid email is required")
    return email
