"""Start-up roster and log data."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Annotated

from pydantic import AwareDatetime, BaseModel, StringConstraints, model_validator

from hostel_gate.domain.movements import MovementAction, MovementLogEntry
from hostel_gate.domain.residents import Resident, ResidentStatus


@dataclass(frozen=True)
class RosterSeed:
    """Residents and logs the store starts with. Logs are newest-first."""

    residents: list[Resident] = field(default_factory=list)
    logs: list[MovementLogEntry] = field(default_factory=list)


RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ResidentSeedModel(BaseModel):
    """Resident row in a seed file."""

    id: str
    name: RequiredText
    room_number: RequiredText
    photo_url: str = ""
    status: ResidentStatus = ResidentStatus.INSIDE


class LogSeedModel(BaseModel):
    """Log row in a seed file."""

    id: str
    student_id: str
    student_name: str
    timestamp: AwareDatetime
    action: MovementAction
    destination: str | None = None


class SeedFile(BaseModel):
    """Top-level seed file payload."""

    residents: list[ResidentSeedModel] = []
    logs: list[LogSeedModel] = []

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "SeedFile":
        resident_ids = [resident.id.upper() for resident in self.residents]
        if len(set(resident_ids)) != len(resident_ids):
            raise ValueError("duplicate resident id in seed")
        log_ids = [log.id for log in self.logs]
        if len(set(log_ids)) != len(log_ids):
            raise ValueError("duplicate log id in seed")
        return self


def demo_seed(now: datetime) -> RosterSeed:
    """Return the built-in demo roster, with log times relative to ``now``."""
    residents = [
        _demo_resident("ST1001", "Rohan Sharma", "A-101", ResidentStatus.INSIDE),
        _demo_resident("ST1002", "Priya Patel", "A-102", ResidentStatus.INSIDE),
        _demo_resident("ST1003", "Amit Singh", "B-205", ResidentStatus.OUTSIDE),
        _demo_resident("ST1004", "Sneha Verma", "B-206", ResidentStatus.INSIDE),
        _demo_resident("ST1005", "Vikram Rathod", "C-301", ResidentStatus.OUTSIDE),
    ]
    logs = [
        MovementLogEntry(
            id="L001",
            student_id="ST1003",
            student_name="Amit Singh",
            timestamp=now - timedelta(hours=2),
            action=MovementAction.EXIT,
            destination="Library",
        ),
        MovementLogEntry(
            id="L002",
            student_id="ST1005",
            student_name="Vikram Rathod",
            timestamp=now - timedelta(hours=3),
            action=MovementAction.EXIT,
            destination="Out of Campus",
        ),
    ]
    return RosterSeed(residents=residents, logs=logs)


def load_seed(path: Path) -> RosterSeed:
    """Load and validate a JSON seed file."""
    payload = SeedFile.model_validate_json(path.read_text(encoding="utf-8"))
    residents = [
        Resident(
            id=row.id,
            name=row.name,
            room_number=row.room_number,
            photo_url=row.photo_url,
            status=row.status,
        )
        for row in payload.residents
    ]
    logs = [
        MovementLogEntry(
            id=row.id,
            student_id=row.student_id,
            student_name=row.student_name,
            timestamp=row.timestamp,
            action=row.action,
            destination=row.destination or None,
        )
        for row in payload.logs
    ]
    logs.sort(key=lambda log: log.timestamp, reverse=True)
    return RosterSeed(residents=residents, logs=logs)


def _demo_resident(
    resident_id: str, name: str, room_number: str, status: ResidentStatus
) -> Resident:
    return Resident(
        id=resident_id,
        name=name,
        room_number=room_number,
        photo_url=f"https://picsum.photos/seed/{resident_id}/200",
        status=status,
    )
