"""Health check endpoints."""

from fastapi import APIRouter, HTTPException, Request
from starlette import status

from core.database import check_db_connection
from core.ratelimit import limiter
from core.telemetry import SERVICE_NAME
from schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check. Always 200 while the process is serving."""
    return HealthResponse(
        status="healthy", service=SERVICE_NAME, message="Service is healthy"
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={
        503: {
            "description": "Service unavailable - init failed or DB unreachable",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Database unavailable",
                        "code": "SERVICE_UNAVAILABLE",
                    }
                }
            },
        }
    },
)
@limiter.limit("30/minute")
async def ready(request: Request) -> HealthResponse:
    """Readiness endpoint.

    Returns 200 only when:
    - Startup (engine creation, table check) has completed successfully
    - The database is reachable
    """
    init_error = getattr(request.app.state, "init_error", None)
    if init_error:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Initialization failed: {init_error}",
        )

    init_done = bool(getattr(request.app.state, "init_done", False))
    if not init_done:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Starting",
        )

    try:
        await check_db_connection(request.app.state.engine)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        ) from e

    return HealthResponse(
        status="ready", service=SERVICE_NAME, message="Service is ready"
    )
