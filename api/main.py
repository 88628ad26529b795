"""FastAPI application for the Offer Hub API."""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import fastapi
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.database import (
    create_engine,
    create_session_maker,
    dispose_engine,
    init_db,
)
from core.errors import AppError
from core.logger import configure_logging
from core.middleware import SecurityHeadersMiddleware
from core.ratelimit import limiter, rate_limit_exceeded_handler
from core.telemetry import RequestTimingMiddleware
from core.wide_event import set_wide_event_fields
from routes import (
    achievements_router,
    activity_logs_router,
    categories_router,
    conversations_router,
    freelancer_skills_router,
    health_router,
    messages_router,
    profiles_router,
    reviews_router,
    service_categories_router,
    service_requests_router,
    services_router,
    skills_router,
    transactions_router,
    user_achievements_router,
    users_router,
)

configure_logging()
logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    message: str,
    code: str,
    details: object = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, object] = {"success": False, "message": message, "code": code}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Domain errors carry their own status and code."""
    if not isinstance(exc, AppError):
        return await global_exception_handler(request, exc)

    set_wide_event_fields(error_code=exc.code)
    logger.info(
        "request.app_error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "code": exc.code,
        },
    )
    return _error_response(exc.status_code, exc.message, exc.code, exc.details)


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unique or foreign-key violations that got past the service checks."""
    logger.warning(
        "db.integrity_error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error": str(getattr(exc, "orig", exc)),
        },
    )
    set_wide_event_fields(error_code="DUPLICATE_ENTRY")
    return _error_response(
        409, "Resource conflicts with an existing record", "DUPLICATE_ENTRY"
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handler for request validation errors."""
    if not isinstance(exc, RequestValidationError):
        return await global_exception_handler(request, exc)

    errors = exc.errors()
    logger.warning(
        "request.validation_error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
        },
    )
    details = [
        {
            "field": ".".join(
                str(part) for part in err.get("loc", ()) if part != "body"
            ),
            "reason": err.get("msg", "Invalid value"),
        }
        for err in errors
    ]
    return _error_response(400, "Validation failed", "VALIDATION_ERROR", details)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Framework HTTP errors (unknown route, wrong method, 503 from /ready)."""
    if not isinstance(exc, StarletteHTTPException):
        return await global_exception_handler(request, exc)

    code = {
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        503: "SERVICE_UNAVAILABLE",
    }.get(exc.status_code, "HTTP_ERROR")
    return _error_response(
        exc.status_code,
        str(exc.detail),
        code,
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unhandled exceptions."""
    logger.exception(
        "unhandled.exception",
        extra={
            "exc_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return _error_response(
        500,
        "An unexpected error occurred. Please try again.",
        "INTERNAL_SERVER_ERROR",
    )


async def _run_alembic_migrations() -> None:
    """Run Alembic migrations in a subprocess.

    psycopg2's connection pool cleanup deadlocks inside
    asyncio.to_thread when uvloop is the event loop.  Running
    migrations as a subprocess avoids the issue entirely.
    """
    import subprocess
    import sys

    cmd = [
        sys.executable,
        "-c",
        (
            "from alembic import command; "
            "from alembic.config import Config; "
            "command.upgrade(Config('alembic.ini'), 'head')"
        ),
    ]
    cwd = Path(__file__).parent

    result = await asyncio.to_thread(
        lambda: subprocess.run(
            cmd, cwd=cwd, capture_output=True, text=True, timeout=120
        )
    )

    if result.returncode != 0:
        stderr = result.stderr.strip()
        logger.error("migrations.failed", extra={"stderr": stderr})
        raise RuntimeError(f"Alembic migration failed:\n{stderr}")

    logger.info("migrations.complete")


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Create DB engine at startup, dispose on shutdown."""
    settings = get_settings()
    app.state.engine = create_engine()
    app.state.session_maker = create_session_maker(app.state.engine)

    app.state.init_done = False
    app.state.init_error = None

    try:
        async with asyncio.timeout(60):
            await init_db(app.state.engine)

        if settings.run_migrations_on_startup:
            async with asyncio.timeout(120):
                await _run_alembic_migrations()

        app.state.init_done = True
        logger.info("init.complete", extra={"environment": settings.environment})
    except TimeoutError:
        logger.error(
            "init.timeout",
            extra={
                "init_done": app.state.init_done,
                "hint": "Startup hung, check DB connectivity and migration state",
            },
        )
        raise RuntimeError("Application startup timed out")
    except Exception as e:
        app.state.init_error = str(e)
        logger.error(
            "init.failed",
            extra={"error": str(e)},
            exc_info=True,
        )
        raise

    try:
        yield
    finally:
        await dispose_engine(app.state.engine)


_settings = get_settings()

app = fastapi.FastAPI(
    title="Offer Hub API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if _settings.enable_docs or _settings.debug else None,
    redoc_url="/redoc" if _settings.enable_docs or _settings.debug else None,
    openapi_url=("/openapi.json" if _settings.enable_docs or _settings.debug else None),
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(SecurityHeadersMiddleware)

if _settings.debug:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
        expose_headers=["X-Request-Duration-Ms", "X-Request-Id"],
        max_age=600,
    )

# Outermost, so the wide event covers every other middleware.
app.add_middleware(RequestTimingMiddleware)

app.include_router(health_router)
app.include_router(users_router)
app.include_router(services_router)
app.include_router(service_requests_router)
app.include_router(categories_router)
app.include_router(service_categories_router)
app.include_router(skills_router)
app.include_router(freelancer_skills_router)
app.include_router(conversations_router)
app.include_router(messages_router)
app.include_router(transactions_router)
app.include_router(reviews_router)
app.include_router(achievements_router)
app.include_router(user_achievements_router)
app.include_router(activity_logs_router)
app.include_router(profiles_router)
