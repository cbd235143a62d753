"""Error Hierarchy — typed, categorized exceptions for all registration failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are raised before any mutation; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ConferenceError base: FastAPI global handler catches all (ADR: uniform error shape)
    - NotFound / Conflict are base classes; concrete subclasses pin code + message so callers
      can catch either the taxonomy bucket or the exact failure
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone

from conference.core.domain_types import (
    LectureKey, LectureNumber, Login, PathNumber,
)


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
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    login: Login | None = None
    path_number: PathNumber | None = None
    lecture_number: LectureNumber | None = None

    def at_lecture(self, key: LectureKey) -> "ErrorContext":
        """Pin the lecture this error is about."""
        self.path_number, self.lecture_number = key
        return self


class ConferenceError(Exception):
    """Base exception for all conference registration errors."""

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
                    "login": self.context.login,
                    "path_number": self.context.path_number,
                    "lecture_number": self.context.lecture_number,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class NotFoundError(ConferenceError):
    """Requested user or lecture does not exist."""
    def __init__(
        self,
        message: str,
        code: str = "RESOURCE_NOT_FOUND",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class InvalidLoginError(NotFoundError):
    """No user owns the given login."""
    def __init__(self, login: Login, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.login = login
        super().__init__("Invalid login provided.", "INVALID_LOGIN", ctx)


class InvalidLectureError(NotFoundError):
    """No lecture sits at the given (path_number, lecture_number)."""
    def __init__(self, key: LectureKey, context: ErrorContext | None = None):
        ctx = (context or ErrorContext()).at_lecture(key)
        super().__init__(
            "Invalid path number or lecture number provided.",
            "INVALID_LECTURE", ctx,
        )


class ConflictError(ConferenceError):
    """Requested change collides with state owned by someone else."""
    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class EmailInUseError(ConflictError):
    """Another user already owns the requested email."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("The email is already in use.", "EMAIL_IN_USE", context)


class CapacityExceededError(ConferenceError):
    """Lecture already holds as many users as its capacity allows."""
    def __init__(self, capacity: int, context: ErrorContext | None = None):
        super().__init__(
            "The lecture is already full.",
            "LECTURE_FULL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.capacity = capacity


class AlreadyRegisteredError(ConferenceError):
    """User is already on the lecture's user set."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User is already registered for this lecture.",
            "ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ConferenceError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
