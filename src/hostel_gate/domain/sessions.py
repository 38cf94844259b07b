"""Domain models for the login session."""

from dataclasses import dataclass
from enum import StrEnum


class UserRole(StrEnum):
    """Roles that can sign in to the dashboard."""

    ADMIN = "ADMIN"
    GUARD = "GUARD"


@dataclass(frozen=True)
class UserSession:
    """The authenticated identity for the running process."""

    username: str
    role: UserRole
