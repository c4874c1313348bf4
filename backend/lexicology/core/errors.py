"""Error Hierarchy — typed, categorized exceptions for all Lexicology failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No driver details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LexicologyError base: FastAPI global handler catches all
    - "Not found" is not raised by repositories (they return None); ResourceNotFoundError
      exists for the routing layer that decides a missing row is an error
    - ConstraintViolationError is a sibling of StoreError, not a subtype: callers that
      pre-check uniqueness want to tell the two apart
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    word_id: str | None = None
    debug_info: dict[str, Any] | None = None


class LexicologyError(Exception):
    """Base exception for all Lexicology errors."""

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
                    "user_id": self.context.user_id,
                    "word_id": self.context.word_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(LexicologyError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidQueryError(LexicologyError):
    """Query parameter passed type validation but is unusable."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class EmailAlreadyRegisteredError(LexicologyError):
    """Email belongs to another user (pre-checked before hitting the unique index)."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            "Email already registered",
            "EMAIL_ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.email = email


class ConstraintViolationError(LexicologyError):
    """Store rejected a write: unique collision or impossible foreign key.

    The driver message stays in context.debug_info; clients see only the operation.
    """
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Constraint violated during {operation}",
            "CONSTRAINT_VIOLATION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.operation = operation


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(LexicologyError):
    """Store operation failed (syntax, I/O, engine)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class SchemaInitializationError(StoreError):
    """Relations could not be created or seeded; the service cannot start."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "initialize", context)
        self.code = "SCHEMA_INITIALIZATION_FAILED"
