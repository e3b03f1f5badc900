"""Permit request types."""

from enum import StrEnum


class RequestType(StrEnum):
    """What a permit authorizes to move through a site."""

    MATERIAL_ENTRANCE = "material_entrance"
    MATERIAL_EXIT = "material_exit"
    HEAVY_VEHICLE_ENTRANCE_EXIT = "heavy_vehicle_entrance_exit"
    HEAVY_VEHICLE_ENTRANCE = "heavy_vehicle_entrance"
    HEAVY_VEHICLE_EXIT = "heavy_vehicle_exit"

    @property
    def is_material_only(self) -> bool:
        """No vehicle is involved; the plate is recorded as N/A."""
        return self in (RequestType.MATERIAL_ENTRANCE, RequestType.MATERIAL_EXIT)

    @property
    def is_vehicle_only(self) -> bool:
        """No materials are carried; a single N/A material is recorded."""
        return self is RequestType.HEAVY_VEHICLE_ENTRANCE_EXIT
