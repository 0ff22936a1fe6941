"""Error Hierarchy: typed, categorized exceptions for every Scholar failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are raised before any backend call is made
    - MalformedResponseError never leaves core/response_sanitizer.py
    - to_response() produces the REST envelope; user-facing text comes from
      ErrorContext.user_message when set

Design Decisions:
    - Single hierarchy with ScholarError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    MALFORMED_RESPONSE = "malformed_response"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    request_key: str | None = None
    session_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class ScholarError(Exception):
    """Base exception for all Scholar errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def user_message(self) -> str:
        """Message safe to show to the end user."""
        return self.context.user_message or self.message

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "request_key": self.context.request_key,
                    "session_id": self.context.session_id,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class ValidationInputError(ScholarError):
    """Caller-side precondition failed; no backend call was made."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or message
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class ResourceNotFoundError(ScholarError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Internal Errors (never surfaced) ───────────────────────────

class MalformedResponseError(ScholarError):
    """Backend text is not valid JSON or violates the schema contract.

    Recovered inside the sanitizer by substituting the fallback value.
    """
    def __init__(self, message: str, payload: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_RESPONSE", ErrorCategory.MALFORMED_RESPONSE,
            ErrorSeverity.WARNING, context, 502,
        )
        self.payload = payload


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigurationError(ScholarError):
    """Backend credential missing or invalid. Raised once, at startup."""
    def __init__(self, message: str, setting: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting


class BackendUnavailableError(ScholarError):
    """Generative backend call failed (transport, timeout, quota)."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Backend error ({api_error_type}): {message}",
            "BACKEND_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 503,
        )
        self.api_error_type = api_error_type
