"""Simulated identity verification at the gate."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class ScanMethod(StrEnum):
    """How the attendant identified the resident."""

    QR = "QR"
    FINGERPRINT = "FINGERPRINT"


class Verifier(Protocol):
    """Capability that turns a scan into a resident id."""

    async def verify(self, resident_id: str, method: ScanMethod) -> str:
        """Wait for the scan to complete and return the scanned id."""


@dataclass
class SimulatedVerifier(Verifier):
    """Stands in for scanner hardware with fixed delays."""

    fingerprint_delay_seconds: float
    processing_delay_seconds: float
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def verify(self, resident_id: str, method: ScanMethod) -> str:
        """Pause as long as the real scan would, then echo the id."""
        if method is ScanMethod.FINGERPRINT and self.fingerprint_delay_seconds > 0:
            await self.sleep(self.fingerprint_delay_seconds)
        if self.processing_delay_seconds > 0:
            await self.sleep(self.processing_delay_seconds)
        return resident_id.strip()
