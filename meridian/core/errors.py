"""Error Hierarchy - typed, categorized exceptions for all client failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Network and HTTP errors are recoverable by the user; session expiry forces
      re-authentication; parse errors are critical contract violations
    - to_display() produces the UI-safe envelope - no transport details leaked

Design Decisions:
    - Single hierarchy with MeridianError base: callers that prefer exceptions
      catch one type (RequestOutcome.unwrap() raises these)
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


NETWORK_ERROR_MESSAGE = (
    "Unable to connect to server. Please check your connection and try again."
)
SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    NETWORK = "network"
    HTTP = "http"
    AUTHORIZATION = "authorization"
    CONTRACT = "contract"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    method: str | None = None
    path: str | None = None
    status_code: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class MeridianError(Exception):
    """Base exception for all Meridian client errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_display(self) -> dict:
        """Convert to the envelope a page renders inline."""
        return {
            "code": self.code,
            "message": self.context.user_message or self.message,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
        }


# ─── Request Errors ──────────────────────────────────────────────

class NetworkUnavailableError(MeridianError):
    """Backend could not be reached (DNS, refused connection, timeout, offline)."""
    def __init__(self, message: str = NETWORK_ERROR_MESSAGE, context: ErrorContext | None = None):
        super().__init__(
            message, "NETWORK_ERROR", ErrorCategory.NETWORK,
            ErrorSeverity.WARNING, context,
        )


class HttpRequestError(MeridianError):
    """Backend rejected the request with a non-success status."""
    def __init__(self, status_code: int, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        super().__init__(
            message, "HTTP_ERROR", ErrorCategory.HTTP,
            ErrorSeverity.WARNING, ctx,
        )
        self.status_code = status_code


class SessionExpiredError(MeridianError):
    """Session was invalidated; the caller must navigate to the login page."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            SESSION_EXPIRED_MESSAGE, "SESSION_EXPIRED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context,
        )


class ResponseParseError(MeridianError):
    """Success response body did not match the declared payload contract."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Malformed response body: {message}",
            "PARSE_ERROR", ErrorCategory.CONTRACT,
            ErrorSeverity.CRITICAL, context,
        )


# ─── Form Errors ─────────────────────────────────────────────────

class FormValidationError(MeridianError):
    """Login or signup form input rejected before any request is sent."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, context,
        )
        self.field = field
