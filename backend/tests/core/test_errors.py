"""Error hierarchy — public envelopes and the fields every error carries."""

import dataclasses

import pytest

from app.core.errors import (
    DatabaseError, ErrorCategory, ErrorContext, MethodNotAllowedError,
    OperationFailedError, RateLimitExceededError, RequestValidationFailed,
    ResourceNotFoundError, StealthNotFoundError,
)


@pytest.mark.parametrize(("error", "envelope"), [
    (RequestValidationFailed("Invalid JSON"), {"ok": False, "error": "Invalid JSON", "code": 400}),
    (StealthNotFoundError("ip"), {"ok": False, "error": "Not Found", "code": 404}),
    (ResourceNotFoundError("Review"), {"ok": False, "error": "Review not found", "code": 404}),
    (MethodNotAllowedError(), {"ok": False, "error": "Method not allowed", "code": 405}),
    (RateLimitExceededError(), {
        "ok": False, "error": "Rate limit exceeded. Please try again later.", "code": 429,
    }),
])
def test_to_response_envelope(error, envelope):
    assert error.to_response() == envelope


def test_database_error_hides_detail():
    error = DatabaseError("relation pricing_items does not exist", "list")
    assert error.to_response() == {"ok": False, "error": "An error occurred", "code": 500}
    assert error.detail == "relation pricing_items does not exist"


def test_upstream_failures_have_no_error_category():
    assert "EXTERNAL_API" not in ErrorCategory.__members__
    assert OperationFailedError("x").category == ErrorCategory.INTERNAL


def test_context_carries_only_logged_fields():
    names = {f.name for f in dataclasses.fields(ErrorContext)}
    assert names == {"timestamp", "client_ip", "resource"}
