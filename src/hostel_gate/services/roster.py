"""Roster and movement log store."""

import logging
import threading
from collections.abc import Callable, Collection
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from hostel_gate.domain.errors import (
    MissingFieldError,
    StoreFailureError,
    UnknownActionError,
    UnknownResidentError,
)
from hostel_gate.domain.movements import MovementAction, MovementLogEntry
from hostel_gate.domain.residents import Resident, ResidentStatus

logger = logging.getLogger(__name__)


class RosterRepository(Protocol):
    """Storage interface for residents and movement logs."""

    def list_residents(self) -> list[Resident]:
        """Return residents in registration order."""

    def find_resident(self, resident_id: str) -> Resident | None:
        """Return the resident with the id, ignoring case, if present."""

    def add_resident(self, resident: Resident) -> None:
        """Append a new resident."""

    def list_logs(self) -> list[MovementLogEntry]:
        """Return log entries, newest first."""

    def log_ids(self) -> set[str]:
        """Return every log entry id."""

    def record_movement(self, resident: Resident, entry: MovementLogEntry) -> None:
        """Replace the resident and prepend the log entry as one change."""


class IdGenerator(Protocol):
    """Source of fresh identifiers."""

    def issue(self, taken: Collection[str]) -> str:
        """Return an id not present in ``taken``."""


@dataclass
class SequentialIdGenerator(IdGenerator):
    """Issues ``prefix + number`` ids, skipping any that are already taken."""

    prefix: str
    next_number: int

    def issue(self, taken: Collection[str]) -> str:
        """Return the next free id and advance the sequence past it."""
        taken_upper = {value.upper() for value in taken}
        while True:
            candidate = f"{self.prefix}{self.next_number}"
            self.next_number += 1
            if candidate.upper() not in taken_upper:
                return candidate


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class RosterService:
    """Owns the roster and log collections and the status transitions.

    Id generation and every read-modify-write step run under one lock.
    """

    repository: RosterRepository
    resident_ids: IdGenerator
    log_ids: IdGenerator
    clock: Callable[[], datetime] = _utcnow
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False
    )

    def register_resident(
        self, name: str, room_number: str, photo_ref: str = ""
    ) -> Resident:
        """Register a new resident, initially inside."""
        cleaned_name = (name or "").strip()
        cleaned_room = (room_number or "").strip()
        if not cleaned_name:
            raise MissingFieldError("name")
        if not cleaned_room:
            raise MissingFieldError("room_number")

        with self._lock:
            taken = [resident.id for resident in self.repository.list_residents()]
            resident_id = self.resident_ids.issue(taken)
            if self.repository.find_resident(resident_id) is not None:
                logger.error(
                    "Resident id collision", extra={"resident_id": resident_id}
                )
                raise StoreFailureError(f"Resident id {resident_id} already exists.")
            resident = Resident(
                id=resident_id,
                name=cleaned_name,
                room_number=cleaned_room,
                photo_url=photo_ref or "",
                status=ResidentStatus.INSIDE,
            )
            self.repository.add_resident(resident)

        logger.info("Registered resident %s", resident.id)
        return resident

    def log_movement(
        self,
        resident_id: str,
        action: MovementAction | str,
        destination: str | None = None,
    ) -> Resident:
        """Apply an ENTRY or EXIT to a resident and record it.

        An ENTRY for a resident already inside changes nothing and writes no
        log entry. An EXIT is always recorded, even if the resident is already
        outside.
        """
        movement = _coerce_action(action)
        with self._lock:
            resident = self.repository.find_resident((resident_id or "").strip())
            if resident is None:
                logger.info(
                    "Movement for unknown resident", extra={"resident_id": resident_id}
                )
                raise UnknownResidentError(resident_id)

            target = movement.target_status
            if movement is MovementAction.ENTRY and resident.status == target:
                logger.debug("Resident %s already inside", resident.id)
                return resident

            log_id = self.log_ids.issue(self.repository.log_ids())
            if log_id in self.repository.log_ids():
                logger.error("Log id collision", extra={"log_id": log_id})
                raise StoreFailureError(f"Log id {log_id} already exists.")
            updated = resident.with_status(target)
            entry = MovementLogEntry(
                id=log_id,
                student_id=resident.id,
                student_name=resident.name,
                timestamp=self.clock(),
                action=movement,
                destination=_exit_destination(movement, destination),
            )
            self.repository.record_movement(updated, entry)

        logger.info("Recorded %s for %s", movement.value, updated.id)
        return updated

    def find_resident(self, resident_id: str) -> Resident | None:
        """Return a resident by id, ignoring case."""
        return self.repository.find_resident((resident_id or "").strip())

    def roster(self) -> tuple[Resident, ...]:
        """Return a snapshot of residents in registration order."""
        with self._lock:
            return tuple(self.repository.list_residents())

    def logs(self) -> tuple[MovementLogEntry, ...]:
        """Return a snapshot of log entries, newest first."""
        with self._lock:
            return tuple(self.repository.list_logs())


def _coerce_action(action: MovementAction | str) -> MovementAction:
    if isinstance(action, MovementAction):
        return action
    try:
        return MovementAction(str(action).strip().upper())
    except ValueError:
        raise UnknownActionError(str(action)) from None


def _exit_destination(action: MovementAction, destination: str | None) -> str | None:
    if action is not MovementAction.EXIT or destination is None:
        return None
    cleaned = destination.strip()
    return cleaned or None
