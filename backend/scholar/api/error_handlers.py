"""Error Handlers: map every exception to the Scholar JSON error envelope.

Invariants:
    - ScholarError -> its own http_status and to_response() envelope;
      4xx logged at WARNING, 5xx at ERROR
    - RequestValidationError is re-expressed as ValidationInputError, so
      schema failures at the HTTP edge and core input checks share one
      envelope; the per-field pydantic errors ride along as "details"
    - Exception (catch-all) -> opaque 500 that trips the fault boundary
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from scholar.core.errors import ErrorContext, ErrorSeverity, ScholarError, ValidationInputError

logger = logging.getLogger(__name__)

_INTERNAL_ERROR = {
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "category": "internal",
        "severity": ErrorSeverity.CRITICAL.value,
    },
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ScholarError, handle_scholar_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_scholar_error(request: Request, exc: ScholarError) -> JSONResponse:
    _log_scholar_error(request, exc)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    field = details[0]["field"] if details else "body"
    error = ValidationInputError(
        f"Invalid request data ({field})", field,
        ErrorContext(debug_info={"errors": len(details)}),
    )
    _log_scholar_error(request, error)
    content = error.to_response()
    content["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=content)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Never leaks internal details; the first one faults the service."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}", exc_info=True,
    )
    boundary = getattr(request.app.state, "fault_boundary", None)
    if boundary is not None:
        boundary.trip(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_INTERNAL_ERROR,
    )


def _log_scholar_error(request: Request, exc: ScholarError) -> None:
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "operation": exc.context.operation,
        },
    )
