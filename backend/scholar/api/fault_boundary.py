"""Fault Boundary: supervisory wrapper around the HTTP app.

Invariants:
    - The first unhandled exception trips the boundary; later ones are only logged
    - Once tripped, every request outside /api/v1/health receives the fallback
      503 payload; health endpoints report the fault
    - There is no reset: leaving the faulted state requires a process restart
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from scholar.core.errors import ErrorSeverity

logger = logging.getLogger(__name__)

_EXEMPT_PREFIX = "/api/v1/health"


class FaultBoundary:
    """Terminal faulted state for the whole process."""

    def __init__(self) -> None:
        self.fault: BaseException | None = None
        self.tripped_at: datetime | None = None

    @property
    def tripped(self) -> bool:
        return self.fault is not None

    def trip(self, exc: BaseException) -> None:
        if self.tripped:
            return
        self.fault = exc
        self.tripped_at = datetime.now(timezone.utc)
        logger.critical(
            "Fault boundary tripped by %s; restart required",
            type(exc).__name__,
        )

    def fallback_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": {
                    "code": "SERVICE_FAULTED",
                    "message": (
                        "An unexpected error occurred. This might be due to a "
                        "missing API key or a network issue. Please restart "
                        "the service."
                    ),
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                    "faulted_at": self.tripped_at.isoformat() if self.tripped_at else None,
                },
            },
        )


def install_fault_boundary(app: FastAPI, boundary: FaultBoundary) -> None:
    """Attach the boundary to app.state and short-circuit requests once tripped."""
    app.state.fault_boundary = boundary

    @app.middleware("http")
    async def fault_boundary_middleware(request: Request, call_next):
        if boundary.tripped and not request.url.path.startswith(_EXEMPT_PREFIX):
            return boundary.fallback_response()
        return await call_next(request)
