"""In-process roster repository."""

from collections import deque

from hostel_gate.domain.errors import StoreFailureError
from hostel_gate.domain.movements import MovementLogEntry
from hostel_gate.domain.residents import Resident
from hostel_gate.seed import RosterSeed
from hostel_gate.services.roster import RosterRepository


class InMemoryRosterRepository(RosterRepository):
    """Keeps residents and logs in memory for the life of the process."""

    def __init__(self, seed: RosterSeed | None = None) -> None:
        self._residents: dict[str, Resident] = {}
        self._logs: deque[MovementLogEntry] = deque()
        if seed is None:
            return
        for resident in seed.residents:
            self.add_resident(resident)
        self._logs.extend(seed.logs)

    def list_residents(self) -> list[Resident]:
        return list(self._residents.values())

    def find_resident(self, resident_id: str) -> Resident | None:
        return self._residents.get(resident_id.upper())

    def add_resident(self, resident: Resident) -> None:
        key = resident.id.upper()
        if key in self._residents:
            raise StoreFailureError(f"Resident id {resident.id} already exists.")
        self._residents[key] = resident

    def list_logs(self) -> list[MovementLogEntry]:
        return list(self._logs)

    def log_ids(self) -> set[str]:
        return {entry.id for entry in self._logs}

    def record_movement(self, resident: Resident, entry: MovementLogEntry) -> None:
        key = resident.id.upper()
        if key not in self._residents:
            raise StoreFailureError(f"Resident {resident.id} is not on the roster.")
        self._residents[key] = resident
        self._logs.appendleft(entry)
