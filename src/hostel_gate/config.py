"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_DESTINATIONS = (
    "LHC (Lecture Hall Complex)",
    "CSC (Computer Services Centre)",
    "SAC (Student Activity Center)",
    "Library",
    "Sports Complex",
    "Main Building",
    "Out of Campus",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_username: str = "admin"
    admin_password: str = "adminpassword"
    guard_username: str = "guard"
    guard_password: str = "guardpassword"
    resident_id_prefix: str = "ST"
    resident_id_start: int = 1001
    log_id_prefix: str = "L"
    destinations: str | None = None
    seed_path: str | None = None
    seed_demo_data: bool = True
    timezone: str = "Asia/Kolkata"
    fingerprint_delay_seconds: float = 1.5
    processing_delay_seconds: float = 0.5
    result_display_seconds: float = 5.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_destinations(raw: str | None) -> list[str]:
    """Parse the comma-separated destination override from env."""
    if raw is None:
        return list(DEFAULT_DESTINATIONS)
    destinations: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in destinations:
            destinations.append(value)
    return destinations or list(DEFAULT_DESTINATIONS)
