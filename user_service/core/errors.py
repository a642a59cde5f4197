"""Error Hierarchy: typed, categorized exceptions for all user-service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() produces the JSON envelope returned by the RPC surface
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserServiceError base: one global handler catches all
    - StoreUnavailableError subclasses StorageFailureError so callers that only
      care about "storage failed" need a single except clause
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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None


class UserServiceError(Exception):
    """Base exception for all user-service errors."""

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
        """Convert to standardized error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "user_id": self.context.user_id,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class PasswordPolicyError(UserServiceError):
    """Plaintext password rejected by the credential policy."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class PasswordTooShortError(PasswordPolicyError):
    """Password shorter than the minimum length."""
    def __init__(self, min_length: int, context: ErrorContext | None = None):
        super().__init__(
            f"password is too short, should be at least {min_length} symbols",
            "PASSWORD_TOO_SHORT", context,
        )
        self.min_length = min_length


class WeakPasswordFormatError(PasswordPolicyError):
    """Password missing a required character class."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "wrong password format: password must contain at least 1 upper "
            "case letter, 1 lower case letter, 1 number and 1 symbol",
            "PASSWORD_WEAK_FORMAT", context,
        )


class InvalidIdentifierError(UserServiceError):
    """Identifier string is not a canonical UUID."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"invalid identifier '{value}': expected a UUID",
            "INVALID_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.value = value


# ─── Infrastructure Errors (500-level) ──────────────────────────

class HashingFailureError(UserServiceError):
    """Password hash could not be produced."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"unable to generate hash for password: {message}",
            "HASHING_FAILURE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class StorageFailureError(UserServiceError):
    """Database operation failed."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "STORAGE_FAILURE",
    ):
        super().__init__(
            f"Database {operation} failed: {message}",
            code, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class StoreUnavailableError(StorageFailureError):
    """Connection supervisor reports the store as unhealthy."""
    def __init__(self, state: str, context: ErrorContext | None = None):
        super().__init__(
            f"store is {state}", "connect", context, code="STORE_UNAVAILABLE",
        )
        self.state = state
