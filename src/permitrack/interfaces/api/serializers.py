"""Entity to JSON (camelCase wire format)."""

from datetime import date, datetime
from typing import Any

from permitrack.application.dto.role_permissions_dto import EffectiveRolePermissions
from permitrack.application.dto.statistics_dto import PermitStatistics
from permitrack.domain.activity_details import extract_permit_number, extract_username
from permitrack.domain.entities import ActivityLogEntry, Material, Permit, User


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value else None


def material_to_dict(m: Material) -> dict[str, Any]:
    return {"id": m.id, "description": m.description, "serialNumber": m.serial_number}


def permit_to_dict(p: Permit) -> dict[str, Any]:
    return {
        "id": str(p.id),
        "permitNumber": p.permit_number,
        "date": _iso(p.date),
        "region": p.region,
        "location": p.location,
        "carrierName": p.carrier_name,
        "carrierId": p.carrier_id,
        "requestType": p.request_type.value,
        "vehiclePlate": p.vehicle_plate,
        "materials": [material_to_dict(m) for m in p.materials],
        "createdBy": str(p.created_by) if p.created_by else None,
        "createdAt": _iso(p.created_at),
        "closedBy": str(p.closed_by) if p.closed_by else None,
        "closedAt": _iso(p.closed_at),
        "closedByName": p.closed_by_name,
        "canReopen": p.can_reopen,
        "status": p.state.value,
    }


def user_to_dict(u: User) -> dict[str, Any]:
    """User without credentials."""
    return {
        "id": str(u.id),
        "username": u.username,
        "email": u.email,
        "firstName": u.first_name,
        "lastName": u.last_name,
        "role": u.role.value,
        "region": list(u.regions),
        "createdAt": _iso(u.created_at),
        "lastLogin": _iso(u.last_login),
    }


def activity_to_dict(e: ActivityLogEntry) -> dict[str, Any]:
    return {
        "id": str(e.id),
        "userId": str(e.actor_id) if e.actor_id else None,
        "name": e.actor_name,
        "username": e.actor_username,
        "action": e.action,
        "details": e.details,
        "timestamp": _iso(e.timestamp),
        "ip": e.source_ip,
        "userAgent": e.user_agent,
        "permitNumber": extract_permit_number(e.details),
        "targetUsername": extract_username(e.details),
    }


def role_permissions_to_dict(r: EffectiveRolePermissions) -> dict[str, Any]:
    return {
        "role": r.role.value,
        "permissions": {cap.value: granted for cap, granted in r.capabilities.items()},
        "overridden": r.overridden,
    }


def statistics_to_dict(s: PermitStatistics) -> dict[str, Any]:
    return {
        "totalPermits": s.total_permits,
        "activePermits": s.active_permits,
        "closedPermits": s.closed_permits,
        "totalUsers": s.total_users,
        "permitsByRegion": s.permits_by_region,
        "permitsByType": s.permits_by_type,
        "permitsTrend": s.permits_trend,
        "topCarriers": [{"name": c.name, "count": c.count} for c in s.top_carriers],
        "topClosers": [{"name": c.name, "count": c.count} for c in s.top_closers],
        "topCreators": [{"name": c.name, "count": c.count} for c in s.top_creators],
    }
