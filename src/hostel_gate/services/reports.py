"""Occupancy counts and log sheet exports."""

import csv
import io
from dataclasses import dataclass
from datetime import date
from zoneinfo import ZoneInfo

from hostel_gate.domain.errors import NothingToExportError
from hostel_gate.domain.movements import MovementLogEntry
from hostel_gate.domain.residents import ResidentStatus
from hostel_gate.services.roster import RosterService

CSV_HEADERS = (
    "Log ID",
    "Student ID",
    "Student Name",
    "Action",
    "Destination",
    "Timestamp",
)


@dataclass(frozen=True)
class OccupancyCounts:
    """How many residents are inside and outside."""

    inside: int
    outside: int
    total: int


@dataclass(frozen=True)
class CsvExport:
    """A rendered CSV file."""

    filename: str
    content: str


@dataclass
class ReportService:
    """Read-only views over the roster for the dashboards."""

    roster_service: RosterService
    timezone_name: str

    def occupancy(self) -> OccupancyCounts:
        """Return inside/outside/total counts."""
        residents = self.roster_service.roster()
        inside = sum(1 for r in residents if r.status == ResidentStatus.INSIDE)
        return OccupancyCounts(
            inside=inside, outside=len(residents) - inside, total=len(residents)
        )

    def logs_for_day(self, day: date | None) -> list[MovementLogEntry]:
        """Return newest-first log entries on ``day`` in the local timezone."""
        logs = self.roster_service.logs()
        if day is None:
            return list(logs)
        tz = ZoneInfo(self.timezone_name)
        return [log for log in logs if log.timestamp.astimezone(tz).date() == day]

    def export_csv(self, day: date | None) -> CsvExport:
        """Render the log sheet for ``day`` as CSV."""
        logs = self.logs_for_day(day)
        if not logs:
            raise NothingToExportError
        tz = ZoneInfo(self.timezone_name)
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for log in logs:
            writer.writerow(
                [
                    log.id,
                    log.student_id,
                    log.student_name,
                    log.action.value,
                    log.destination or "",
                    log.timestamp.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S"),
                ]
            )
        suffix = day.isoformat() if day else "all"
        return CsvExport(filename=f"hostel_logs_{suffix}.csv", content=buffer.getvalue())

    def today(self) -> date:
        """Return the current date in the local timezone."""
        now = self.roster_service.clock()
        return now.astimezone(ZoneInfo(self.timezone_name)).date()
