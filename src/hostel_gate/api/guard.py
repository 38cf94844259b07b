"""Gate attendant API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from hostel_gate.api.access import require_role
from hostel_gate.api.models import ExitRequest, ScanRequest  # noqa: TC001
from hostel_gate.api.serializers import (
    serialize_counts,
    serialize_resident,
    serialize_view,
)
from hostel_gate.domain.sessions import UserRole

if TYPE_CHECKING:
    from hostel_gate.containers import AppContainer

router = APIRouter(
    prefix="/guard",
    tags=["guard"],
    dependencies=[Depends(require_role(UserRole.GUARD))],
)


@router.get("/stats")
async def stats(request: Request) -> dict[str, object]:
    """Return inside/outside counts."""
    container: AppContainer = request.app.state.container
    return serialize_counts(container.report_service.occupancy())


@router.get("/residents")
async def list_residents(request: Request) -> dict[str, object]:
    """Return residents to pick from during fingerprint verification."""
    container: AppContainer = request.app.state.container
    residents = container.roster_service.roster()
    return {"residents": [serialize_resident(r) for r in residents]}


@router.get("/destinations")
async def destinations(request: Request, q: str | None = None) -> dict[str, object]:
    """Return destinations matching the search term."""
    container: AppContainer = request.app.state.container
    return {"destinations": container.destination_catalog.search(q)}


@router.get("/terminal")
async def terminal(request: Request) -> dict[str, object]:
    """Return the verification terminal view."""
    container: AppContainer = request.app.state.container
    return serialize_view(container.gate_terminal.view())


@router.post("/terminal/fingerprint")
async def begin_fingerprint(request: Request) -> dict[str, object]:
    """Open fingerprint verification."""
    container: AppContainer = request.app.state.container
    return serialize_view(container.gate_terminal.begin_fingerprint())


@router.post("/terminal/scan")
async def scan(payload: ScanRequest, request: Request) -> dict[str, object]:
    """Verify a scan and check the resident in, or ask for a destination."""
    container: AppContainer = request.app.state.container
    view = await container.gate_terminal.submit_scan(
        payload.resident_id, payload.method
    )
    return serialize_view(view)


@router.post("/terminal/exit")
async def confirm_exit(payload: ExitRequest, request: Request) -> dict[str, object]:
    """Check out the pending resident."""
    container: AppContainer = request.app.state.container
    return serialize_view(container.gate_terminal.confirm_exit(payload.destination))


@router.post("/terminal/cancel")
async def cancel(request: Request) -> dict[str, object]:
    """Reset the terminal."""
    container: AppContainer = request.app.state.container
    return serialize_view(container.gate_terminal.cancel())
