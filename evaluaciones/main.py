"""Evaluaciones FastAPI application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from evaluaciones.api.admin import router as admin_router
from evaluaciones.api.auth import router as auth_router
from evaluaciones.api.evaluations import router as evaluations_router
from evaluaciones.api.health import router as health_router
from evaluaciones.api.pages import router as pages_router
from evaluaciones.auth.rate_limit import LoginRateLimiter
from evaluaciones.auth.sessions import SessionManager
from evaluaciones.config import Settings, settings as default_settings
from evaluaciones.database import create_schema, make_engine, make_session_maker
from evaluaciones.errors import (
    AuthError,
    NotAuthenticated,
    NotFoundError,
    RateLimitError,
    StorageError,
    ValidationError,
)
from evaluaciones.headers import SecurityHeaders
from evaluaciones.rendering import page

logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    for name in cfg.insecure_defaults():
        logger.warning("%s is using its insecure default; set it before deploying", name)
    if cfg.auto_create_schema:
        await create_schema(app.state.engine)
    yield
    await app.state.engine.dispose()


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotAuthenticated)
    async def not_authenticated(request: Request, exc: NotAuthenticated):
        return RedirectResponse("/login", status_code=302)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(AuthError)
    async def auth_error(request: Request, exc: AuthError):
        return page(request, "Login docente", "login_failed.html", status_code=exc.status_code)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return page(
            request,
            "No encontrada",
            "not_found.html",
            status_code=exc.status_code,
            heading=exc.message,
            detail=None,
        )

    @app.exception_handler(RateLimitError)
    async def rate_limited(request: Request, exc: RateLimitError):
        headers = {"Retry-After": str(exc.retry_after)} if exc.retry_after else None
        return PlainTextResponse(exc.message, status_code=exc.status_code, headers=headers)

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        return page(
            request, "Error", "error.html", status_code=exc.status_code, message=exc.message
        )

    @app.exception_handler(StarletteHTTPException)
    async def unmatched_route(request: Request, exc: StarletteHTTPException):
        if exc.status_code != 404:
            return await http_exception_handler(request, exc)
        return page(
            request,
            "No encontrado",
            "not_found.html",
            status_code=404,
            heading="404",
            detail="La ruta solicitada no existe.",
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its own store handle, session manager and limiter."""
    cfg = settings or default_settings

    app = FastAPI(
        title="Plataforma de Evaluaciones",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = cfg
    app.state.engine = make_engine(cfg)
    app.state.session_maker = make_session_maker(app.state.engine)
    app.state.sessions = SessionManager(
        cfg.session_secret,
        cfg.session_max_age,
        cookie_name=cfg.session_cookie_name,
        https_only=cfg.session_https_only,
    )
    app.state.login_limiter = LoginRateLimiter(cfg.login_rate_limit)

    app.add_middleware(SecurityHeaders)
    _register_error_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(pages_router, tags=["Pages"])
    app.include_router(auth_router, tags=["Auth"])
    app.include_router(admin_router, tags=["Admin"])
    app.include_router(evaluations_router, tags=["Evaluations"])
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=default_settings.port, proxy_headers=True)
