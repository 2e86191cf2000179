"""Teacher login and logout."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from evaluaciones.auth.middleware import (
    LoginRateLimitDep,
    SessionDep,
    SessionManagerDep,
    access_code_matches,
)
from evaluaciones.errors import AuthError
from evaluaciones.rendering import page

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/login")
async def login_form(request: Request, manager: SessionManagerDep, session: SessionDep):
    if manager.is_teacher_authenticated(session):
        return RedirectResponse("/admin", status_code=302)
    return page(request, "Login docente", "login.html")


@router.post("/login", dependencies=[LoginRateLimitDep])
async def login(request: Request, manager: SessionManagerDep, session: SessionDep):
    """Check the shared access code. Runs only after the rate limiter admits the attempt."""
    form = await request.form()
    code = str(form.get("code") or "").strip()
    if not code:
        return RedirectResponse("/login", status_code=302)
    if not access_code_matches(code, request.app.state.settings.access_code_docente):
        logger.info("Rejected teacher login attempt")
        raise AuthError()

    response = RedirectResponse("/admin", status_code=302)
    manager.mark_teacher_authenticated(response, session)
    logger.info("Teacher session started")
    return response


@router.post("/logout")
async def logout(request: Request, manager: SessionManagerDep):
    response = RedirectResponse("/", status_code=302)
    manager.destroy(request, response)
    return response
