"""Tests for the gate verification terminal."""

import asyncio

import pytest

from hostel_gate.domain.errors import MissingFieldError, TerminalStateError
from hostel_gate.domain.movements import MovementAction
from hostel_gate.domain.residents import ResidentStatus
from hostel_gate.services.terminal import (
    INVALID_ID_MESSAGE,
    GateTerminal,
    TerminalState,
)
from hostel_gate.services.verification import ScanMethod
from tests.conftest import GatedVerifier


def test_qr_scan_of_resident_inside_asks_for_destination(
    terminal, roster_service
) -> None:
    view = asyncio.run(terminal.submit_scan("ST1001"))

    assert view.state is TerminalState.AWAITING_DESTINATION
    assert view.resident.id == "ST1001"
    assert len(roster_service.logs()) == 2

    result = terminal.confirm_exit("Library")

    assert result.state is TerminalState.SHOWING_RESULT
    assert result.action is MovementAction.EXIT
    assert result.resident.status is ResidentStatus.OUTSIDE
    assert roster_service.logs()[0].destination == "Library"


def test_qr_scan_of_resident_outside_checks_in(terminal, roster_service) -> None:
    view = asyncio.run(terminal.submit_scan("st1003"))

    assert view.state is TerminalState.SHOWING_RESULT
    assert view.action is MovementAction.ENTRY
    assert view.resident.status is ResidentStatus.INSIDE
    assert roster_service.logs()[0].student_id == "ST1003"


def test_unknown_scan_shows_error_then_allows_retry(terminal) -> None:
    view = asyncio.run(terminal.submit_scan("ST9999"))

    assert view.state is TerminalState.ERROR
    assert view.message == INVALID_ID_MESSAGE

    retry = asyncio.run(terminal.submit_scan("ST1003"))
    assert retry.state is TerminalState.SHOWING_RESULT


def test_fingerprint_flow_requires_prompt_first(terminal, verifier) -> None:
    with pytest.raises(TerminalStateError):
        asyncio.run(terminal.submit_scan("ST1005", ScanMethod.FINGERPRINT))

    prompt = terminal.begin_fingerprint()
    view = asyncio.run(terminal.submit_scan("ST1005", ScanMethod.FINGERPRINT))

    assert prompt.state is TerminalState.AWAITING_VERIFICATION
    assert view.state is TerminalState.SHOWING_RESULT
    assert verifier.calls == [("ST1005", ScanMethod.FINGERPRINT)]


def test_confirm_exit_requires_destination(terminal, roster_service) -> None:
    asyncio.run(terminal.submit_scan("ST1002"))

    with pytest.raises(MissingFieldError):
        terminal.confirm_exit("  ")

    assert terminal.view().state is TerminalState.AWAITING_DESTINATION
    assert len(roster_service.logs()) == 2


def test_cancel_abandons_pending_exit(terminal, roster_service) -> None:
    asyncio.run(terminal.submit_scan("ST1002"))

    view = terminal.cancel()

    assert view.state is TerminalState.IDLE
    assert roster_service.find_resident("ST1002").status is ResidentStatus.INSIDE
    with pytest.raises(TerminalStateError):
        terminal.confirm_exit("Library")


def test_result_blocks_scans_until_it_expires(terminal, clock) -> None:
    asyncio.run(terminal.submit_scan("ST1003"))

    with pytest.raises(TerminalStateError):
        asyncio.run(terminal.submit_scan("ST1005"))

    clock.advance(seconds=5)
    assert terminal.view().state is TerminalState.IDLE
    view = asyncio.run(terminal.submit_scan("ST1005"))
    assert view.state is TerminalState.SHOWING_RESULT


def test_error_expires_back_to_idle(terminal, clock) -> None:
    asyncio.run(terminal.submit_scan("NOPE"))

    clock.advance(seconds=4)
    assert terminal.view().state is TerminalState.ERROR
    clock.advance(seconds=1)
    assert terminal.view().state is TerminalState.IDLE


def test_blank_scan_is_rejected(terminal) -> None:
    with pytest.raises(MissingFieldError):
        asyncio.run(terminal.submit_scan("   "))

    assert terminal.view().state is TerminalState.IDLE


def _gated_terminal(roster_service) -> tuple[GateTerminal, GatedVerifier]:
    verifier = GatedVerifier()
    terminal = GateTerminal(
        roster_service=roster_service,
        verifier=verifier,
        result_display_seconds=5.0,
    )
    return terminal, verifier


def test_cancel_during_verification_records_nothing(roster_service) -> None:
    terminal, verifier = _gated_terminal(roster_service)
    logs_before = roster_service.logs()

    async def scenario():
        scan = asyncio.create_task(terminal.submit_scan("ST1003"))
        await asyncio.sleep(0)
        terminal.cancel()
        verifier.release()
        return await scan

    view = asyncio.run(scenario())

    assert view.state is TerminalState.IDLE
    assert terminal.view().state is TerminalState.IDLE
    assert roster_service.find_resident("ST1003").status is ResidentStatus.OUTSIDE
    assert roster_service.logs() == logs_before


def test_second_scan_rejected_while_first_is_verifying(roster_service) -> None:
    terminal, verifier = _gated_terminal(roster_service)
    terminal.begin_fingerprint()

    async def scenario():
        first = asyncio.create_task(
            terminal.submit_scan("ST1003", ScanMethod.FINGERPRINT)
        )
        await asyncio.sleep(0)
        with pytest.raises(TerminalStateError):
            await terminal.submit_scan("ST1005", ScanMethod.FINGERPRINT)
        with pytest.raises(TerminalStateError):
            await terminal.submit_scan("ST1005")
        verifier.release()
        return await first

    view = asyncio.run(scenario())

    new_logs = roster_service.logs()[:-2]
    assert view.state is TerminalState.SHOWING_RESULT
    assert [log.student_id for log in new_logs] == ["ST1003"]
    assert roster_service.find_resident("ST1005").status is ResidentStatus.OUTSIDE


def test_scan_can_restart_after_cancelled_verification(roster_service) -> None:
    terminal, verifier = _gated_terminal(roster_service)

    async def scenario():
        abandoned = asyncio.create_task(terminal.submit_scan("ST1003"))
        await asyncio.sleep(0)
        terminal.cancel()
        verifier.release()
        await abandoned
        return await terminal.submit_scan("ST1005")

    view = asyncio.run(scenario())

    assert view.state is TerminalState.SHOWING_RESULT
    assert view.resident.id == "ST1005"
    assert roster_service.find_resident("ST1003").status is ResidentStatus.OUTSIDE
