"""Login session store."""

import logging
from dataclasses import dataclass, field

from hostel_gate.domain.errors import InvalidCredentialsError
from hostel_gate.domain.sessions import UserRole, UserSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    """A static username/password pair bound to a role."""

    username: str
    password: str
    role: UserRole


@dataclass
class SessionService:
    """Holds the single active session for the process."""

    credentials: list[Credential]
    _current: UserSession | None = field(default=None, init=False, repr=False)

    def login(self, username: str, password: str) -> UserSession:
        """Sign in with a configured credential pair.

        Usernames match case-insensitively, passwords exactly. Both inputs are
        trimmed. A failed attempt leaves the current session as it was.
        """
        trimmed_username = (username or "").strip().lower()
        trimmed_password = (password or "").strip()
        for credential in self.credentials:
            if (
                trimmed_username == credential.username.lower()
                and trimmed_password == credential.password
            ):
                session = UserSession(username=credential.username, role=credential.role)
                self._current = session
                logger.info(
                    "User signed in",
                    extra={"username": session.username, "role": session.role.value},
                )
                return session

        logger.warning("Failed sign-in attempt", extra={"username": trimmed_username})
        raise InvalidCredentialsError

    def logout(self) -> None:
        """Clear the current session. Safe to call when signed out."""
        if self._current is not None:
            logger.info("User signed out", extra={"username": self._current.username})
        self._current = None

    def current_session(self) -> UserSession | None:
        """Return the active session, if any."""
        return self._current
