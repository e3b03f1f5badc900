"""Permit API resources."""

import csv
import io
from typing import Any

import falcon
import falcon.asgi

from permitrack.application.dto.permit_dto import PermitCreateInput, PermitFilter, PermitUpdateInput
from permitrack.application.use_cases.permit.close_permit import ClosePermitUseCase
from permitrack.application.use_cases.permit.create_permit import CreatePermitUseCase
from permitrack.application.use_cases.permit.delete_permit import DeletePermitUseCase
from permitrack.application.use_cases.permit.export_permits import ExportPermitsUseCase
from permitrack.application.use_cases.permit.get_permit import GetPermitUseCase, ListPermitsUseCase
from permitrack.application.use_cases.permit.reopen_permit import ReopenPermitUseCase
from permitrack.application.use_cases.permit.update_permit import UpdatePermitUseCase
from permitrack.application.validation import (
    parse_date,
    parse_materials,
    parse_request_type,
)
from permitrack.domain.entities import Permit
from permitrack.interfaces.api.request import actor, json_body, parse_id
from permitrack.interfaces.api.serializers import permit_to_dict

EXPORT_COLUMNS = (
    "Permit Number",
    "Date",
    "Region",
    "Location",
    "Carrier Name",
    "Carrier ID",
    "Request Type",
    "Vehicle Plate",
    "Materials",
    "Status",
    "Closed By",
    "Closed At",
    "Created At",
)


def permit_filter_from_query(req: falcon.asgi.Request) -> PermitFilter:
    date_param = req.get_param("date")
    return PermitFilter(
        region=req.get_param("region") or None,
        date=parse_date(date_param) if date_param else None,
        search=req.get_param("search") or None,
    )


def create_input_from_body(body: dict[str, Any]) -> PermitCreateInput:
    return PermitCreateInput(
        permit_number=body.get("permitNumber"),
        date=parse_date(body.get("date")),
        region=body.get("region"),
        location=body.get("location"),
        carrier_name=body.get("carrierName"),
        carrier_id=body.get("carrierId"),
        request_type=parse_request_type(body.get("requestType")),
        vehicle_plate=body.get("vehiclePlate") or "",
        materials=parse_materials(body.get("materials") or []),
    )


def update_input_from_body(body: dict[str, Any]) -> PermitUpdateInput:
    """Keys absent from the body stay None and keep their stored values."""
    return PermitUpdateInput(
        permit_number=body.get("permitNumber"),
        date=parse_date(body["date"]) if "date" in body else None,
        region=body.get("region"),
        location=body.get("location"),
        carrier_name=body.get("carrierName"),
        carrier_id=body.get("carrierId"),
        request_type=parse_request_type(body["requestType"]) if "requestType" in body else None,
        vehicle_plate=body.get("vehiclePlate"),
        materials=parse_materials(body["materials"]) if "materials" in body else None,
    )


def permits_to_csv(permits: list[Permit]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(EXPORT_COLUMNS)
    for p in permits:
        writer.writerow(
            (
                p.permit_number,
                p.date.isoformat(),
                p.region,
                p.location,
                p.carrier_name,
                p.carrier_id,
                p.request_type.value,
                p.vehicle_plate,
                "; ".join(f"{m.description} ({m.serial_number})" for m in p.materials),
                p.state.value,
                p.closed_by_name or "",
                p.closed_at.isoformat() if p.closed_at else "",
                p.created_at.isoformat(),
            )
        )
    return buf.getvalue()


class PermitsResource:
    """GET/POST /permits - list and create permits."""

    def __init__(self, list_permits: ListPermitsUseCase, create_permit: CreatePermitUseCase) -> None:
        self._list_permits = list_permits
        self._create_permit = create_permit

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List permits visible to the caller. Filters: region, date, search."""
        permits = await self._list_permits.execute(actor(req), permit_filter_from_query(req))
        resp.media = {"permits": [permit_to_dict(p) for p in permits]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        permit = await self._create_permit.execute(actor(req), create_input_from_body(body))
        resp.media = {"permit": permit_to_dict(permit)}
        resp.status = falcon.HTTP_201


class PermitExportResource:
    """GET /permits/export - CSV of the permits the caller may see."""

    def __init__(self, export_permits: ExportPermitsUseCase) -> None:
        self._export_permits = export_permits

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        permits = await self._export_permits.execute(actor(req), permit_filter_from_query(req))
        resp.content_type = "text/csv; charset=utf-8"
        resp.set_header("Content-Disposition", 'attachment; filename="permits.csv"')
        resp.text = permits_to_csv(permits)
        resp.status = falcon.HTTP_200


class PermitResource:
    """/permits/{permit_id} and its close/reopen transitions."""

    def __init__(
        self,
        get_permit: GetPermitUseCase,
        update_permit: UpdatePermitUseCase,
        delete_permit: DeletePermitUseCase,
        close_permit: ClosePermitUseCase,
        reopen_permit: ReopenPermitUseCase,
    ) -> None:
        self._get_permit = get_permit
        self._update_permit = update_permit
        self._delete_permit = delete_permit
        self._close_permit = close_permit
        self._reopen_permit = reopen_permit

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permit_id: str
    ) -> None:
        permit = await self._get_permit.execute(actor(req), parse_id(permit_id, "Permit"))
        resp.media = {"permit": permit_to_dict(permit)}
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permit_id: str
    ) -> None:
        body = await json_body(req)
        permit = await self._update_permit.execute(
            actor(req), parse_id(permit_id, "Permit"), update_input_from_body(body)
        )
        resp.media = {"permit": permit_to_dict(permit)}
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permit_id: str
    ) -> None:
        await self._delete_permit.execute(actor(req), parse_id(permit_id, "Permit"))
        resp.media = {"message": "Permit deleted successfully"}
        resp.status = falcon.HTTP_200

    async def on_patch_close(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permit_id: str
    ) -> None:
        """PATCH /permits/{permit_id}/close"""
        permit = await self._close_permit.execute(actor(req), parse_id(permit_id, "Permit"))
        resp.media = {"permit": permit_to_dict(permit)}
        resp.status = falcon.HTTP_200

    async def on_patch_reopen(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permit_id: str
    ) -> None:
        """PATCH /permits/{permit_id}/reopen"""
        permit = await self._reopen_permit.execute(actor(req), parse_id(permit_id, "Permit"))
        resp.media = {"permit": permit_to_dict(permit)}
        resp.status = falcon.HTTP_200
