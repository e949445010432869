"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.trustedhost import TrustedHostMiddleware

from vaultgate.api.access import router as access_router
from vaultgate.api.auth import router as auth_router
from vaultgate.api.health import router as health_router
from vaultgate.config import Settings
from vaultgate.exceptions import GENERIC_ERROR_MESSAGE, PortalError, ServiceError
from vaultgate.services.rate_limit_service import FailedLoginLimiter
from vaultgate.services.script_client import ScriptClient, create_http_client

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.responses import Response

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def create_script_client(settings: Settings) -> ScriptClient:
    """Build the backend client, warning early when no endpoint is configured."""
    client = ScriptClient(settings.google_apps_script_url, create_http_client(settings))
    if not client.configured:
        logger.warning(
            "GOOGLE_APPS_SCRIPT_URL is not set; logins will fail until it is configured"
        )
    return client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: startup and shutdown."""
    settings: Settings = app.state.settings
    settings.validate_runtime_security()
    _configure_logging(settings.debug)
    logger.info("Starting VaultGate (debug=%s)", settings.debug)

    script_client = create_script_client(settings)
    app.state.script_client = script_client

    yield

    try:
        await script_client.aclose()
    except Exception as exc:
        logger.error("Error closing backend HTTP client: %s", exc, exc_info=True)

    logger.info("VaultGate stopped")


def _error_response(exc: PortalError) -> JSONResponse:
    content = {"success": False, "error": exc.message, **exc.response_extras()}
    return JSONResponse(status_code=exc.status_code, content=content)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    docs_enabled = settings.debug or settings.expose_docs

    app = FastAPI(
        title="VaultGate",
        description="Password-gated document portal",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.rate_limiter = FailedLoginLimiter(
        max_attempts=settings.login_max_failures,
        block_seconds=settings.login_block_minutes * 60,
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    cors_origins = (
        settings.cors_origins
        if settings.cors_origins
        else (["http://localhost:3000", "http://localhost:8000"] if settings.debug else [])
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    trusted_hosts = settings.trusted_hosts or (
        ["localhost", "127.0.0.1", "::1", "test", "testserver"] if settings.debug else []
    )
    if trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)

    @app.middleware("http")
    async def security_headers(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        if settings.security_headers_enabled:
            response.headers.setdefault("X-Content-Type-Options", "nosniff")
            response.headers.setdefault("X-Frame-Options", "DENY")
            response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
            if settings.content_security_policy:
                response.headers.setdefault(
                    "Content-Security-Policy",
                    settings.content_security_policy,
                )
        return response

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(access_router)

    # Global exception handlers: every error body is {"success": false, "error": ...}

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = []
        for err in exc.errors():
            loc = err.get("loc", ())
            field = str(loc[-1]) if loc else "unknown"
            errors.append({"field": field, "message": err.get("msg", "Invalid value")})
        logger.warning(
            "RequestValidationError in %s %s: %s",
            request.method,
            request.url.path,
            errors,
        )
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request."},
        )

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
        if isinstance(exc, ServiceError):
            logger.error(
                "%s in %s %s: %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc.detail,
                exc_info=exc,
            )
        else:
            logger.warning(
                "%s in %s %s: %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc.detail,
            )
        return _error_response(exc)

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(request: Request, exc: RuntimeError) -> JSONResponse:
        if isinstance(exc, (NotImplementedError, RecursionError)):
            raise exc
        logger.error(
            "RuntimeError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": GENERIC_ERROR_MESSAGE},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.error("ValueError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": GENERIC_ERROR_MESSAGE},
        )

    @app.exception_handler(TypeError)
    async def type_error_handler(request: Request, exc: TypeError) -> JSONResponse:
        logger.error(
            "[BUG] TypeError in %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": GENERIC_ERROR_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled %s in %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": GENERIC_ERROR_MESSAGE},
        )

    # Serve frontend static files in production
    frontend_dir = settings.frontend_dir
    if frontend_dir.exists():
        app.mount("/", StaticFiles(directory=str(frontend_dir), html=True), name="static")

    return app


app = create_app()


def cli_entry() -> None:
    """CLI entry point for running the server."""
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(
        "vaultgate.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
