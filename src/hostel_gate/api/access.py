"""Role checks for API routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from hostel_gate.domain.sessions import UserRole, UserSession

if TYPE_CHECKING:
    from collections.abc import Callable

    from hostel_gate.containers import AppContainer


def require_role(role: UserRole) -> Callable[[Request], UserSession]:
    """Build a dependency that admits only the signed-in ``role``."""

    def dependency(request: Request) -> UserSession:
        container: AppContainer = request.app.state.container
        session = container.session_service.current_session()
        if session is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        if session.role is not role:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
        return session

    return dependency
