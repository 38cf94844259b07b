"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hostel_gate.api.admin import router as admin_router
from hostel_gate.api.guard import router as guard_router
from hostel_gate.api.models import LoginRequest
from hostel_gate.api.serializers import serialize_session
from hostel_gate.app_logging import configure_logging
from hostel_gate.containers import AppContainer
from hostel_gate.domain.errors import (
    GateError,
    InvalidCredentialsError,
    StoreFailureError,
    TerminalStateError,
    UnknownActionError,
    UnknownResidentError,
    ValidationError,
)

_UNPROCESSABLE = 422

_ERROR_STATUS: tuple[tuple[type[GateError], int], ...] = (
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (ValidationError, _UNPROCESSABLE),
    (UnknownResidentError, status.HTTP_404_NOT_FOUND),
    (UnknownActionError, _UNPROCESSABLE),
    (TerminalStateError, status.HTTP_409_CONFLICT),
    (StoreFailureError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        counts = app.state.container.report_service.occupancy()
        logger.info(
            "Gate dashboard ready",
            extra={"environment": container.settings.environment, "total": counts.total},
        )
        yield
        app.state.container.session_service.logout()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)
    app.include_router(guard_router)

    @app.exception_handler(GateError)
    async def gate_error_handler(request: Request, exc: GateError) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Store failure: %s", exc, extra={"path": request.url.path})
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/login")
    async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
        """Sign in as administrator or gate attendant."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.login(
            payload.username, payload.password
        )
        return {"session": serialize_session(session)}

    @app.post("/auth/logout")
    async def logout(request: Request) -> dict[str, object]:
        """Sign out."""
        state_container: AppContainer = request.app.state.container
        state_container.session_service.logout()
        return {"session": None}

    @app.get("/auth/session")
    async def current_session(request: Request) -> dict[str, object]:
        """Return the signed-in identity, if any."""
        state_container: AppContainer = request.app.state.container
        return {
            "session": serialize_session(
                state_container.session_service.current_session()
            )
        }

    return app


def error_status(exc: GateError) -> int:
    """Map a gate error to its HTTP status code."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST
