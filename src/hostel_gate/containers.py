"""Dependency container wiring for the application."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from hostel_gate.adapters.memory_roster_repository import InMemoryRosterRepository
from hostel_gate.config import Settings, parse_destinations
from hostel_gate.domain.sessions import UserRole
from hostel_gate.seed import RosterSeed, demo_seed, load_seed
from hostel_gate.services.destinations import DestinationCatalog
from hostel_gate.services.qr_codes import QrCodeService
from hostel_gate.services.reports import ReportService
from hostel_gate.services.roster import RosterService, SequentialIdGenerator
from hostel_gate.services.sessions import Credential, SessionService
from hostel_gate.services.terminal import GateTerminal
from hostel_gate.services.verification import SimulatedVerifier, Verifier

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService
    roster_service: RosterService
    report_service: ReportService
    qr_code_service: QrCodeService
    destination_catalog: DestinationCatalog
    gate_terminal: GateTerminal


def build_seed(settings: Settings, now: datetime) -> RosterSeed:
    """Resolve the start-up roster from settings."""
    if settings.seed_path:
        return load_seed(Path(settings.seed_path))
    if settings.seed_demo_data:
        return demo_seed(now)
    return RosterSeed()


def build_container(
    settings: Settings | None = None, verifier: Verifier | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    seed = build_seed(resolved_settings, datetime.now(tz=UTC))
    repository = InMemoryRosterRepository(seed)
    roster_service = RosterService(
        repository=repository,
        resident_ids=SequentialIdGenerator(
            prefix=resolved_settings.resident_id_prefix,
            next_number=resolved_settings.resident_id_start + len(seed.residents),
        ),
        log_ids=SequentialIdGenerator(
            prefix=resolved_settings.log_id_prefix,
            next_number=len(seed.logs) + 1,
        ),
    )
    session_service = SessionService(
        credentials=[
            Credential(
                username=resolved_settings.admin_username,
                password=resolved_settings.admin_password,
                role=UserRole.ADMIN,
            ),
            Credential(
                username=resolved_settings.guard_username,
                password=resolved_settings.guard_password,
                role=UserRole.GUARD,
            ),
        ]
    )
    gate_terminal = GateTerminal(
        roster_service=roster_service,
        verifier=verifier
        or SimulatedVerifier(
            fingerprint_delay_seconds=resolved_settings.fingerprint_delay_seconds,
            processing_delay_seconds=resolved_settings.processing_delay_seconds,
        ),
        result_display_seconds=resolved_settings.result_display_seconds,
    )
    logger.info(
        "Roster loaded",
        extra={"residents": len(seed.residents), "logs": len(seed.logs)},
    )
    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
        roster_service=roster_service,
        report_service=ReportService(
            roster_service=roster_service,
            timezone_name=resolved_settings.timezone,
        ),
        qr_code_service=QrCodeService(roster_service),
        destination_catalog=DestinationCatalog(
            tuple(parse_destinations(resolved_settings.destinations))
        ),
        gate_terminal=gate_terminal,
    )
