"""Teacher gate and login dependencies."""

import hmac
from typing import Annotated

from fastapi import Depends, Request

from evaluaciones.auth.rate_limit import LoginRateLimiter
from evaluaciones.auth.sessions import SessionData, SessionManager
from evaluaciones.errors import NotAuthenticated


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_current_session(
    request: Request,
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> SessionData | None:
    return manager.load(request)


def is_teacher(request: Request) -> bool:
    """Auth state for page chrome; never used as an access check."""
    manager: SessionManager = request.app.state.sessions
    return manager.is_teacher_authenticated(manager.load(request))


def require_teacher(
    manager: Annotated[SessionManager, Depends(get_session_manager)],
    session: Annotated[SessionData | None, Depends(get_current_session)],
) -> SessionData:
    """Redirect to /login (via NotAuthenticated) before any data access."""
    if not manager.is_teacher_authenticated(session):
        raise NotAuthenticated()
    return session


def enforce_login_rate_limit(request: Request) -> None:
    limiter: LoginRateLimiter = request.app.state.login_limiter
    client = request.client.host if request.client else "unknown"
    limiter.hit(client)


def access_code_matches(submitted: str, expected: str) -> bool:
    """Exact string match, compared in constant time."""
    return hmac.compare_digest(submitted.encode("utf-8"), expected.encode("utf-8"))


# Type aliases for dependency injection
SessionDep = Annotated[SessionData | None, Depends(get_current_session)]
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]
TeacherDep = Annotated[SessionData, Depends(require_teacher)]
LoginRateLimitDep = Depends(enforce_login_rate_limit)
