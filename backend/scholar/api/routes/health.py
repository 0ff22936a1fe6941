"""Health & Readiness Probes: liveness and readiness endpoints.

Invariants:
    - GET /health/ returns 200 while the fault boundary is intact, 503 once
      it has tripped (restart required)
    - GET /health/ready additionally reports in-flight registry requests
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

_SERVICE = {"service": "scrabble-scholar-api", "version": "1.0.0"}


def _faulted_response(request: Request) -> JSONResponse | None:
    boundary = getattr(request.app.state, "fault_boundary", None)
    if boundary is None or not boundary.tripped:
        return None
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "faulted",
            "reason": type(boundary.fault).__name__,
            **_SERVICE,
        },
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Liveness probe."""
    return _faulted_response(request) or {"status": "healthy", **_SERVICE}


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe: services wired and boundary intact."""
    faulted = _faulted_response(request)
    if faulted:
        return faulted
    registry = getattr(request.app.state, "definition_registry", None)
    if registry is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "services_not_initialized"},
        )
    return {
        "status": "ready",
        "checks": {"backend_client": "configured"},
        "in_flight_requests": registry.in_flight,
    }
