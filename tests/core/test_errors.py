"""Error Hierarchy: codes, statuses and the JSON envelope.

Tests cover:
    - Each error maps to its documented code and HTTP status
    - StoreUnavailableError is a StorageFailureError
    - to_response() carries code, message, category, severity and context
"""

from user_service.core.errors import (
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    HashingFailureError,
    InvalidIdentifierError,
    PasswordTooShortError,
    StorageFailureError,
    StoreUnavailableError,
    UserServiceError,
    WeakPasswordFormatError,
)


def test_error_codes_and_statuses():
    cases = [
        (PasswordTooShortError(8), "PASSWORD_TOO_SHORT", 400),
        (WeakPasswordFormatError(), "PASSWORD_WEAK_FORMAT", 400),
        (InvalidIdentifierError("nope"), "INVALID_IDENTIFIER", 400),
        (HashingFailureError("bad salt"), "HASHING_FAILURE", 500),
        (StorageFailureError("boom", "execute"), "STORAGE_FAILURE", 503),
        (StoreUnavailableError("failed"), "STORE_UNAVAILABLE", 503),
    ]
    for exc, code, status in cases:
        assert isinstance(exc, UserServiceError)
        assert exc.code == code
        assert exc.http_status == status


def test_store_unavailable_is_storage_failure():
    exc = StoreUnavailableError("reconnecting")
    assert isinstance(exc, StorageFailureError)
    assert exc.state == "reconnecting"
    assert exc.category is ErrorCategory.DATABASE


def test_storage_failure_message_includes_operation():
    exc = StorageFailureError("Integrity constraint violated", "commit")
    assert exc.message == "Database commit failed: Integrity constraint violated"
    assert exc.operation == "commit"
    assert exc.severity is ErrorSeverity.CRITICAL


def test_invalid_identifier_keeps_value():
    exc = InvalidIdentifierError("not-a-uuid")
    assert exc.value == "not-a-uuid"
    assert "not-a-uuid" in exc.message


def test_to_response_envelope():
    ctx = ErrorContext(operation="GetUserByID", user_id="u1")
    body = InvalidIdentifierError("x", context=ctx).to_response()
    error = body["error"]
    assert error["code"] == "INVALID_IDENTIFIER"
    assert error["category"] == "validation"
    assert error["severity"] == "error"
    assert error["context"] == {"operation": "GetUserByID", "user_id": "u1"}
    assert error["timestamp"] == ctx.timestamp.isoformat()
