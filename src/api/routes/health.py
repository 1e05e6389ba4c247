"""Health check endpoints for monitoring and deployment verification."""

import time
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Response, status

from src.core.supabase import check_database_connection, check_storage_connection
from src.schemas.common import CheckResult, HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running. Used for liveness probes.",
)
async def health_check() -> HealthResponse:
    """Return basic health status.

    This endpoint should always return 200 if the service is running.
    It does not check external dependencies.
    """
    return HealthResponse(status=HealthStatus.HEALTHY)


async def _timed_check(name: str, check: Callable[[], Awaitable[dict[str, Any]]]) -> CheckResult:
    start_time = time.perf_counter()
    result = await check()
    latency_ms = (time.perf_counter() - start_time) * 1000

    return CheckResult(
        name=name,
        healthy=result["healthy"],
        latency_ms=round(latency_ms, 2),
        error=result.get("error"),
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Readiness check",
    description="Check if the profile table and image bucket are available. Used for readiness probes.",
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """Check readiness of the document store and the blob store.

    Returns 503 if any dependency is unhealthy.
    """
    checks = [
        await _timed_check("database", check_database_connection),
        await _timed_check("storage", check_storage_connection),
    ]

    all_healthy = all(check.healthy for check in checks)
    overall_status = HealthStatus.HEALTHY if all_healthy else HealthStatus.UNHEALTHY

    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(status=overall_status, checks=checks)
