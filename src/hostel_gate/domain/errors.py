"""Typed failures raised by the gate services."""


class GateError(Exception):
    """Base class for expected failures surfaced to callers."""


class AuthError(GateError):
    """Login failures."""


class InvalidCredentialsError(AuthError):
    """No configured credential pair matched."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class ValidationError(GateError):
    """Input rejected before any state change."""


class MissingFieldError(ValidationError):
    """A required field was empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Field '{field}' is required.")
        self.field = field


class NothingToExportError(ValidationError):
    """An export was requested for an empty selection."""

    def __init__(self) -> None:
        super().__init__("No log entries to export.")


class MovementError(GateError):
    """Movement logging failures."""


class UnknownResidentError(MovementError):
    """No resident matches the requested id."""

    def __init__(self, resident_id: str) -> None:
        super().__init__(f"Invalid Student ID: {resident_id!r}.")
        self.resident_id = resident_id


class UnknownActionError(MovementError):
    """Action is neither ENTRY nor EXIT."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Unknown movement action: {action!r}.")
        self.action = action


class StoreFailureError(MovementError):
    """An internal store invariant was violated."""


class TerminalStateError(GateError):
    """A terminal operation was attempted from the wrong state."""
