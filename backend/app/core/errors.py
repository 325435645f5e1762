"""Error Hierarchy — typed, categorized exceptions for every portfolio API failure mode.

Invariants:
    - Every error has a message, code (str), category, severity and http_status
    - to_response() produces the public envelope {ok: false, error, code}
    - Infrastructure errors carry generic messages (no internal details leaked)

Design Decisions:
    - Single hierarchy with PortfolioError base: one global handler renders all of them
    - `code` in the envelope is the HTTP status; the string code is for logs only
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RATE_LIMIT = "rate_limit"
    RESOURCE_NOT_FOUND = "resource_not_found"
    METHOD = "method"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to errors for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    client_ip: str | None = None
    resource: str | None = None


class PortfolioError(Exception):
    """Base exception for all portfolio API errors."""

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

    def to_response(self) -> dict:
        """Convert to the public JSON error envelope."""
        return {"ok": False, "error": self.message, "code": self.http_status}


# ─── Request Errors (400-level) ─────────────────────────────────

class RequestValidationFailed(PortfolioError):
    """Request input failed validation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidCredentialsError(PortfolioError):
    """Admin login with wrong username or password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class StealthNotFoundError(PortfolioError):
    """Admin gate refusal, rendered exactly like an unknown route."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "Not Found", "NOT_FOUND", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.INFO, context, 404,
        )
        self.reason = reason


class ResourceNotFoundError(PortfolioError):
    """Requested row does not exist."""
    def __init__(self, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class MethodNotAllowedError(PortfolioError):
    """HTTP method not supported by the endpoint."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Method not allowed", "METHOD_NOT_ALLOWED", ErrorCategory.METHOD,
            ErrorSeverity.INFO, context, 405,
        )


class RateLimitExceededError(PortfolioError):
    """Client exceeded the request-rate window."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Rate limit exceeded. Please try again later.",
            "RATE_LIMIT_EXCEEDED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.INFO, context, 429,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigurationError(PortfolioError):
    """Required server-side configuration is missing."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(PortfolioError):
    """Database operation failed. Detail goes to logs, not to the client."""
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "An error occurred", "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail
        self.operation = operation


class OperationFailedError(PortfolioError):
    """Endpoint-level failure with a fixed public message."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "OPERATION_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
