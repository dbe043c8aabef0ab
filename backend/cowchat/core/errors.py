"""Error Hierarchy — typed, categorized exceptions for all CowChat failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are user-correctable; infrastructure errors (500-level) are not
    - to_response() produces the REST envelope
    - No storage details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CowChatError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Storage failures are never retried: they propagate to the boundary as-is
"""

from dataclasses import dataclass, field
from enum import Enum
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cow_name: str | None = None
    operation: str | None = None


class CowChatError(Exception):
    """Base exception for all CowChat errors."""

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
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class CapacityExhaustedError(CowChatError):
    """Every catalog name is already taken."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Insufficient cows in meadow! Let some go!",
            "CAPACITY_EXHAUSTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


class EntityNotFoundError(CowChatError):
    """Requested cow does not exist."""
    def __init__(self, cow_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.cow_name = cow_name
        super().__init__(
            f"Cow '{cow_name}' not found",
            "ENTITY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.cow_name = cow_name


# ─── Infrastructure Errors (500-level) ──────────────────────────

class QueryFailedError(CowChatError):
    """A read against the store failed or returned an impossible result."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database query failed ({operation})",
            "QUERY_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class WriteFailedError(CowChatError):
    """A write against the store failed, including constraint violations."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Could not write {operation} to database",
            "WRITE_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class ServiceUnavailableError(CowChatError):
    """Connection pool exhausted or database unreachable."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Service unavailable: {reason}",
            "SERVICE_UNAVAILABLE", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.reason = reason
