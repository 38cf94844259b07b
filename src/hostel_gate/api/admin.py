"""Administrator API endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response, status

from hostel_gate.api.access import require_role
from hostel_gate.api.models import RegisterResidentRequest  # noqa: TC001
from hostel_gate.api.serializers import (
    serialize_counts,
    serialize_log,
    serialize_resident,
)
from hostel_gate.domain.sessions import UserRole

if TYPE_CHECKING:
    from hostel_gate.containers import AppContainer

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)


@router.get("/stats")
async def stats(request: Request) -> dict[str, object]:
    """Return inside/outside counts."""
    container: AppContainer = request.app.state.container
    return serialize_counts(container.report_service.occupancy())


@router.get("/residents")
async def list_residents(request: Request) -> dict[str, object]:
    """Return the resident roster."""
    container: AppContainer = request.app.state.container
    residents = container.roster_service.roster()
    return {"residents": [serialize_resident(r) for r in residents]}


@router.post("/residents", status_code=status.HTTP_201_CREATED)
async def register_resident(
    payload: RegisterResidentRequest, request: Request
) -> dict[str, object]:
    """Register a resident and return it with its QR code."""
    container: AppContainer = request.app.state.container
    resident = container.roster_service.register_resident(
        payload.name, payload.room_number, payload.photo_url
    )
    return {
        "resident": serialize_resident(resident),
        "qr_code": container.qr_code_service.data_url(resident.id),
    }


@router.get("/residents/{resident_id}/qr")
async def resident_qr(resident_id: str, request: Request) -> Response:
    """Return a resident's QR code as a PNG download."""
    container: AppContainer = request.app.state.container
    content = container.qr_code_service.png(resident_id)
    filename = container.qr_code_service.filename(resident_id)
    return Response(
        content=content,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/logs")
async def list_logs(request: Request, day: date | None = None) -> dict[str, object]:
    """Return movement logs, newest first, optionally for one day."""
    container: AppContainer = request.app.state.container
    logs = container.report_service.logs_for_day(day)
    return {
        "day": day.isoformat() if day else None,
        "today": container.report_service.today().isoformat(),
        "logs": [serialize_log(log) for log in logs],
    }


@router.get("/logs/export")
async def export_logs(request: Request, day: date | None = None) -> Response:
    """Return the log sheet as a CSV download."""
    container: AppContainer = request.app.state.container
    export = container.report_service.export_csv(day)
    return Response(
        content=export.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
