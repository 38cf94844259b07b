"""Gate attendant verification terminal."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum

from hostel_gate.domain.errors import (
    MissingFieldError,
    MovementError,
    TerminalStateError,
)
from hostel_gate.domain.movements import MovementAction
from hostel_gate.domain.residents import Resident, ResidentStatus
from hostel_gate.services.roster import RosterService
from hostel_gate.services.verification import ScanMethod, Verifier

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "Invalid Student ID."
ENTRY_FAILED_MESSAGE = "Could not process the request."
EXIT_FAILED_MESSAGE = "Could not process the exit log."


class TerminalState(StrEnum):
    """Screens the verification terminal can show."""

    IDLE = "IDLE"
    AWAITING_VERIFICATION = "AWAITING_VERIFICATION"
    AWAITING_DESTINATION = "AWAITING_DESTINATION"
    SHOWING_RESULT = "SHOWING_RESULT"
    ERROR = "ERROR"


_TIMED_STATES = {TerminalState.SHOWING_RESULT, TerminalState.ERROR}
_READY_STATES = {TerminalState.IDLE, TerminalState.ERROR}


@dataclass(frozen=True)
class TerminalView:
    """What the terminal is currently showing."""

    state: TerminalState
    resident: Resident | None = None
    action: MovementAction | None = None
    message: str | None = None


_IDLE_VIEW = TerminalView(state=TerminalState.IDLE)


@dataclass
class GateTerminal:
    """State machine driving check-in and check-out at the gate."""

    roster_service: RosterService
    verifier: Verifier
    result_display_seconds: float
    _view: TerminalView = field(default=_IDLE_VIEW, init=False, repr=False)
    _shown_at: datetime | None = field(default=None, init=False, repr=False)
    _scans_started: int = field(default=0, init=False, repr=False)
    _active_scan: int | None = field(default=None, init=False, repr=False)

    def view(self) -> TerminalView:
        """Return the current view, expiring stale results first."""
        return self.expire()

    def expire(self, now: datetime | None = None) -> TerminalView:
        """Return to idle once a result or error has been shown long enough."""
        if self._view.state in _TIMED_STATES and self._shown_at is not None:
            current = now or self.roster_service.clock()
            shown_for = timedelta(seconds=self.result_display_seconds)
            if current - self._shown_at >= shown_for:
                self._set(_IDLE_VIEW)
        return self._view

    def begin_fingerprint(self) -> TerminalView:
        """Open the fingerprint verification prompt."""
        self._require(_READY_STATES, "begin fingerprint verification")
        return self._set(TerminalView(state=TerminalState.AWAITING_VERIFICATION))

    async def submit_scan(
        self, resident_id: str, method: ScanMethod = ScanMethod.QR
    ) -> TerminalView:
        """Verify a scanned id and decide whether the resident enters or leaves.

        Residents inside are asked for a destination before they are checked
        out. Residents outside are checked in straight away.

        Only one scan runs at a time. A scan abandoned with ``cancel`` while it
        is being verified records nothing.
        """
        if self._active_scan is not None:
            raise TerminalStateError("Cannot submit a scan while one is in progress.")
        if method is ScanMethod.FINGERPRINT:
            self._require({TerminalState.AWAITING_VERIFICATION}, "submit fingerprint")
        else:
            self._require(_READY_STATES, "submit QR scan")
        if not (resident_id or "").strip():
            raise MissingFieldError("resident_id")

        self._set(TerminalView(state=TerminalState.AWAITING_VERIFICATION))
        self._scans_started += 1
        scan = self._active_scan = self._scans_started
        try:
            scanned_id = await self.verifier.verify(resident_id, method)
        except Exception:
            logger.exception("Verification failed", extra={"method": method.value})
            if self._active_scan == scan:
                self._set(_IDLE_VIEW)
            raise
        if self._active_scan != scan:
            logger.info("Scan abandoned", extra={"method": method.value})
            return self._view

        resident = self.roster_service.find_resident(scanned_id)
        if resident is None:
            return self._fail(INVALID_ID_MESSAGE)

        if resident.status == ResidentStatus.INSIDE:
            return self._set(
                TerminalView(
                    state=TerminalState.AWAITING_DESTINATION,
                    resident=resident,
                    action=MovementAction.EXIT,
                )
            )

        try:
            updated = self.roster_service.log_movement(resident.id, MovementAction.ENTRY)
        except MovementError:
            logger.exception("Check-in failed", extra={"resident_id": resident.id})
            return self._fail(ENTRY_FAILED_MESSAGE)
        return self._show_result(updated, MovementAction.ENTRY)

    def confirm_exit(self, destination: str) -> TerminalView:
        """Check out the pending resident to ``destination``."""
        self._require({TerminalState.AWAITING_DESTINATION}, "confirm exit")
        if not (destination or "").strip():
            raise MissingFieldError("destination")
        resident = self._view.resident
        if resident is None:
            raise TerminalStateError("No resident is waiting for a destination.")

        try:
            updated = self.roster_service.log_movement(
                resident.id, MovementAction.EXIT, destination
            )
        except MovementError:
            logger.exception("Check-out failed", extra={"resident_id": resident.id})
            return self._fail(EXIT_FAILED_MESSAGE)
        return self._show_result(updated, MovementAction.EXIT)

    def cancel(self) -> TerminalView:
        """Abandon whatever the terminal is doing."""
        return self._set(_IDLE_VIEW)

    def _require(self, states: set[TerminalState], operation: str) -> None:
        current = self.expire().state
        if current not in states:
            raise TerminalStateError(f"Cannot {operation} while {current.value}.")

    def _show_result(self, resident: Resident, action: MovementAction) -> TerminalView:
        return self._set(
            TerminalView(
                state=TerminalState.SHOWING_RESULT, resident=resident, action=action
            ),
            timed=True,
        )

    def _fail(self, message: str) -> TerminalView:
        return self._set(
            TerminalView(state=TerminalState.ERROR, message=message), timed=True
        )

    def _set(self, view: TerminalView, *, timed: bool = False) -> TerminalView:
        self._view = view
        self._active_scan = None
        self._shown_at = self.roster_service.clock() if timed else None
        return view
