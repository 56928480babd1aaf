"""Error Hierarchy - tests for codes, severities and the display envelope."""

from meridian.core.errors import (
    ErrorCategory, ErrorContext, FormValidationError, HttpRequestError,
    NETWORK_ERROR_MESSAGE, NetworkUnavailableError, ResponseParseError,
    SessionExpiredError,
)


def test_network_error_uses_fixed_user_message():
    err = NetworkUnavailableError()
    assert err.message == NETWORK_ERROR_MESSAGE
    assert err.category is ErrorCategory.NETWORK
    assert err.recoverable


def test_http_error_records_status_in_context():
    err = HttpRequestError(409, "Username taken")
    assert err.context.status_code == 409
    assert err.to_display() == {
        "code": "HTTP_ERROR",
        "message": "Username taken",
        "severity": "warning",
        "recoverable": True,
    }


def test_session_expired_is_not_recoverable():
    assert not SessionExpiredError().recoverable


def test_parse_error_is_critical_contract_violation():
    err = ResponseParseError("Expecting value", context=ErrorContext(path="/users"))
    assert err.code == "PARSE_ERROR"
    assert err.category is ErrorCategory.CONTRACT
    assert err.severity.value == "critical"
    assert err.context.path == "/users"


def test_display_prefers_user_message_from_context():
    err = ResponseParseError(
        "raw detail", context=ErrorContext(user_message="Something went wrong"),
    )
    assert err.to_display()["message"] == "Something went wrong"


def test_form_error_keeps_field():
    err = FormValidationError("Please enter your username", "username")
    assert err.field == "username"
    assert err.category is ErrorCategory.VALIDATION
