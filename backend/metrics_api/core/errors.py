"""Error Hierarchy: typed, categorized errors for every failure mode of the metrics API.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by the global error handler
    - Messages are user-facing; raw database causes stay in the logs

Design Decisions:
    - Errors are exceptions AND Err payloads: domain factories raise them,
      services return them inside Result, routes re-raise via Result.unwrap()
    - IntegrityViolationError / ServiceUnavailableError subclass DatabaseError so
      repository ports keep a two-member error union (DatabaseError | NotFoundError)
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


class ConstraintKind(str, Enum):
    """Which store constraint rejected a write."""
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    OTHER = "other"


@dataclass
class ErrorContext:
    """Extra context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    operation: str | None = None


class MetricsError(Exception):
    """Base exception for all metrics API errors."""

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
                "context": {
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetricsError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(MetricsError):
    """Malformed or missing input, duplicate, or business-rule violation."""
    def __init__(
        self, message: str, field: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        return response


class NotFoundError(MetricsError):
    """Referenced id or name does not exist."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )

    @classmethod
    def for_resource(cls, resource_type: str, key: str, value: object) -> "NotFoundError":
        return cls(
            f"{resource_type} with {key} '{value}' not found",
            ErrorContext(resource_type=resource_type, resource_id=str(value)),
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MetricsError):
    """Persistence operation failed. Message is generic; the cause is logged."""
    def __init__(
        self,
        message: str,
        operation: str = "unknown",
        context: ErrorContext | None = None,
        code: str = "DATABASE_ERROR",
        category: ErrorCategory = ErrorCategory.DATABASE,
        http_status: int = 500,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.operation = operation


class IntegrityViolationError(DatabaseError):
    """A store-level constraint (unique, foreign key) rejected the write."""
    def __init__(
        self,
        message: str,
        operation: str = "commit",
        context: ErrorContext | None = None,
        constraint: ConstraintKind = ConstraintKind.OTHER,
    ):
        super().__init__(
            message, operation, context, code="INTEGRITY_VIOLATION",
        )
        self.constraint = constraint


class ServiceUnavailableError(DatabaseError):
    """The backing store is unreachable or not initialized."""
    def __init__(
        self,
        message: str = "Service is not available",
        operation: str = "connect",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, operation, context, code="SERVICE_UNAVAILABLE",
            category=ErrorCategory.UNAVAILABLE, http_status=503,
        )
