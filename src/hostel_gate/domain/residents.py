"""Domain models for hostel residents."""

from dataclasses import dataclass, replace
from enum import StrEnum


class ResidentStatus(StrEnum):
    """Where a resident currently is relative to the gate."""

    INSIDE = "INSIDE"
    OUTSIDE = "OUTSIDE"


@dataclass(frozen=True)
class Resident:
    """Represents a registered resident."""

    id: str
    name: str
    room_number: str
    photo_url: str
    status: ResidentStatus = ResidentStatus.INSIDE

    def with_status(self, status: ResidentStatus) -> "Resident":
        """Return a copy of the resident with a new status."""
        return replace(self, status=status)
