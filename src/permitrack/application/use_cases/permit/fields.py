"""Field rules shared by permit create and update."""

from permitrack.application.validation import (
    require_text,
    validate_permit_number,
    validate_region,
)
from permitrack.domain.entities import Material, Permit
from permitrack.domain.entities.permit import NOT_APPLICABLE, vehicle_only_materials
from permitrack.domain.exceptions import ValidationError


def normalize_permit(permit: Permit) -> Permit:
    """Validate permit fields in place and apply request-type rules.

    Material-only requests carry no vehicle, vehicle-only requests carry
    the single N/A material. Everything else needs real materials and a
    plate.
    """
    permit.permit_number = validate_permit_number(require_text(permit.permit_number, "permitNumber"))
    permit.region = validate_region(require_text(permit.region, "region"))
    permit.location = require_text(permit.location, "location")
    permit.carrier_name = require_text(permit.carrier_name, "carrierName")
    permit.carrier_id = require_text(permit.carrier_id, "carrierId")

    if permit.request_type.is_vehicle_only:
        permit.materials = vehicle_only_materials()
    elif not permit.materials or _is_placeholder(permit.materials):
        raise ValidationError("At least one material is required")

    if permit.request_type.is_material_only:
        permit.vehicle_plate = NOT_APPLICABLE
    else:
        permit.vehicle_plate = require_text(permit.vehicle_plate, "vehiclePlate")
    return permit


def _is_placeholder(materials: list[Material]) -> bool:
    return materials == vehicle_only_materials()
