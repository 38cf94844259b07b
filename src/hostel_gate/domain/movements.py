"""Domain models for gate movements."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from hostel_gate.domain.residents import ResidentStatus


class MovementAction(StrEnum):
    """Direction of a movement through the gate."""

    ENTRY = "ENTRY"
    EXIT = "EXIT"

    @property
    def target_status(self) -> ResidentStatus:
        """Status a resident ends up in after this movement."""
        if self is MovementAction.ENTRY:
            return ResidentStatus.INSIDE
        return ResidentStatus.OUTSIDE


@dataclass(frozen=True)
class MovementLogEntry:
    """Immutable record of one ENTRY or EXIT event.

    ``student_name`` is a snapshot taken when the event was recorded.
    ``destination`` is only set for exits with a destination, otherwise None.
    """

    id: str
    student_id: str
    student_name: str
    timestamp: datetime
    action: MovementAction
    destination: str | None = None
