"""JSON shapes returned by the HTTP API."""

from hostel_gate.domain.movements import MovementLogEntry
from hostel_gate.domain.residents import Resident
from hostel_gate.domain.sessions import UserSession
from hostel_gate.services.reports import OccupancyCounts
from hostel_gate.services.terminal import TerminalView


def serialize_session(session: UserSession | None) -> dict[str, object] | None:
    if session is None:
        return None
    return {"username": session.username, "role": session.role.value}


def serialize_resident(resident: Resident) -> dict[str, object]:
    return {
        "id": resident.id,
        "name": resident.name,
        "room_number": resident.room_number,
        "photo_url": resident.photo_url,
        "status": resident.status.value,
    }


def serialize_log(log: MovementLogEntry) -> dict[str, object]:
    return {
        "id": log.id,
        "student_id": log.student_id,
        "student_name": log.student_name,
        "timestamp": log.timestamp.isoformat(),
        "action": log.action.value,
        "destination": log.destination,
    }


def serialize_counts(counts: OccupancyCounts) -> dict[str, int]:
    return {"inside": counts.inside, "outside": counts.outside, "total": counts.total}


def serialize_view(view: TerminalView) -> dict[str, object]:
    return {
        "state": view.state.value,
        "resident": serialize_resident(view.resident) if view.resident else None,
        "action": view.action.value if view.action else None,
        "message": view.message,
    }
