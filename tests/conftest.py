"""Shared test fixtures."""

import asyncio
from collections.abc import Collection
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from hostel_gate.adapters.memory_roster_repository import InMemoryRosterRepository
from hostel_gate.config import Settings
from hostel_gate.containers import AppContainer, build_container
from hostel_gate.domain.sessions import UserRole
from hostel_gate.seed import RosterSeed, demo_seed
from hostel_gate.services.roster import IdGenerator, RosterService, SequentialIdGenerator
from hostel_gate.services.sessions import Credential, SessionService
from hostel_gate.services.terminal import GateTerminal
from hostel_gate.services.verification import ScanMethod, Verifier

FIXED_NOW = datetime(2026, 3, 14, 9, 30, tzinfo=UTC)


@dataclass
class FakeClock:
    """Clock that only moves when told to."""

    now: datetime = FIXED_NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class RecordingVerifier(Verifier):
    """Zero-delay verifier that records every scan."""

    calls: list[tuple[str, ScanMethod]] = field(default_factory=list)

    async def verify(self, resident_id: str, method: ScanMethod) -> str:
        self.calls.append((resident_id, method))
        return resident_id.strip()


@dataclass
class FixedIdGenerator(IdGenerator):
    """Id generator that always returns the same id."""

    value: str

    def issue(self, taken: Collection[str]) -> str:
        return self.value


def make_roster_service(
    clock: FakeClock, seed: RosterSeed | None = None
) -> RosterService:
    resolved_seed = seed if seed is not None else demo_seed(clock.now)
    return RosterService(
        repository=InMemoryRosterRepository(resolved_seed),
        resident_ids=SequentialIdGenerator(
            prefix="ST", next_number=1001 + len(resolved_seed.residents)
        ),
        log_ids=SequentialIdGenerator(
            prefix="L", next_number=len(resolved_seed.logs) + 1
        ),
        clock=clock,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        timezone="UTC",
        seed_demo_data=True,
        seed_path=None,
        destinations=None,
        fingerprint_delay_seconds=0,
        processing_delay_seconds=0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def roster_service(clock: FakeClock) -> RosterService:
    return make_roster_service(clock)


@pytest.fixture
def session_service() -> SessionService:
    return SessionService(
        credentials=[
            Credential(username="admin", password="adminpassword", role=UserRole.ADMIN),
            Credential(username="guard", password="guardpassword", role=UserRole.GUARD),
        ]
    )


@pytest.fixture
def verifier() -> RecordingVerifier:
    return RecordingVerifier()


@pytest.fixture
def terminal(
    roster_service: RosterService, verifier: RecordingVerifier
) -> GateTerminal:
    return GateTerminal(
        roster_service=roster_service,
        verifier=verifier,
        result_display_seconds=5.0,
    )


@pytest.fixture
def container(settings: Settings, verifier: RecordingVerifier) -> AppContainer:
    return build_container(settings, verifier=verifier)


@dataclass
class GatedVerifier(Verifier):
    """Verifier that holds every scan until ``release`` is called."""

    gate: asyncio.Event = field(default_factory=asyncio.Event)

    async def verify(self, resident_id: str, method: ScanMethod) -> str:
        await self.gate.wait()
        return resident_id.strip()

    def release(self) -> None:
        self.gate.set()
