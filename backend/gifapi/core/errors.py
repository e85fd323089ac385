"""Error Hierarchy: closed taxonomy of failure kinds and the JSON error envelope.

Invariants:
    - Every error carries exactly one ErrorKind; http_status derives from it
    - to_response() returns {"code": <status>, "message": <kind>} and nothing else
    - detail is for logs only, never serialized into a response

Design Decisions:
    - Closed ErrorKind enum mapped once via _KIND_STATUS instead of per-class status codes
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for log level selection."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorKind(str, Enum):
    """The three outcomes a failed request can map to."""
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    UNHANDLED_REJECTION = "UNHANDLED_REJECTION"


_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.UNHANDLED_REJECTION: 500,
}


def status_for(kind: ErrorKind) -> int:
    return _KIND_STATUS[kind]


def error_envelope(kind: ErrorKind) -> dict:
    """Build the response body for an error kind."""
    return {"code": status_for(kind), "message": kind.value}


class GifApiError(Exception):
    """Base exception for all GIF API errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        detail: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.severity = severity
        self.detail = detail or {}

    @property
    def http_status(self) -> int:
        return status_for(self.kind)

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return error_envelope(self.kind)


# ─── Client Errors (400-level) ──────────────────────────────────

class GifNotFoundError(GifApiError):
    """No row matched the requested category."""
    def __init__(self, category: str):
        super().__init__(
            f"No gif found for category '{category}'",
            ErrorKind.NOT_FOUND, ErrorSeverity.INFO,
            {"category": category},
        )
        self.category = category


class MethodNotAllowedError(GifApiError):
    """Path exists but not for the requested method."""
    def __init__(self, method: str, path: str):
        super().__init__(
            f"{method} not allowed on {path}",
            ErrorKind.METHOD_NOT_ALLOWED, ErrorSeverity.INFO,
            {"method": method, "path": path},
        )


# ─── Internal Errors (500-level) ────────────────────────────────

class InternalError(GifApiError):
    """Any failure the client cannot act on."""
    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        detail: dict | None = None,
    ):
        super().__init__(
            message, ErrorKind.UNHANDLED_REJECTION, severity, detail,
        )


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorSeverity.CRITICAL, {"operation": operation},
        )
        self.operation = operation


class IdGenerationError(InternalError):
    """Snowflake generator refused to produce an id."""


class ClockMovedBackwardsError(IdGenerationError):
    """Wall clock is behind the last timestamp used for an id."""
    def __init__(self, last_timestamp: int, now: int):
        super().__init__(
            f"Clock moved backwards by {last_timestamp - now}ms; "
            "refusing to generate id",
            ErrorSeverity.CRITICAL,
            {"last_timestamp": last_timestamp, "now": now},
        )
        self.last_timestamp = last_timestamp
        self.now = now


class TimestampOverflowError(IdGenerationError):
    """Milliseconds since epoch no longer fit the timestamp field."""
    def __init__(self, delta_ms: int, max_delta_ms: int):
        super().__init__(
            f"Timestamp delta {delta_ms}ms exceeds {max_delta_ms}ms",
            ErrorSeverity.CRITICAL,
            {"delta_ms": delta_ms},
        )


# ─── Startup ────────────────────────────────────────────────────

class StartupError(Exception):
    """Configuration or initial connection failure; the process must not start."""
