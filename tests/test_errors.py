"""Tests LegitmarkError / ConfigurationError : champs, valeurs par défaut, format de log."""

from __future__ import annotations

import pytest

from legitmark.errors import ConfigurationError, ErrorCode, ErrorContext, LegitmarkError


@pytest.mark.parametrize("code", list(ErrorCode))
def test_error_accepts_every_code(code: ErrorCode) -> None:
    error = LegitmarkError(code, f"Test {code.value} message")

    assert error.code is code
    assert str(error) == f"Test {code.value} message"


def test_error_accepts_code_as_string() -> None:
    error = LegitmarkError("NETWORK_ERROR", "Connection failed")

    assert error.code is ErrorCode.NETWORK_ERROR
    assert error.message == "Connection failed"


def test_error_defaults_to_non_retryable_with_empty_context() -> None:
    error = LegitmarkError(ErrorCode.UNKNOWN_ERROR, "Test")

    assert error.retryable is False
    assert error.suggestions == ()
    assert error.context == ErrorContext()
    assert error.cause is None


def test_error_keeps_cause_and_chains_it() -> None:
    original = OSError("fetch failed")
    error = LegitmarkError(ErrorCode.NETWORK_ERROR, "Request failed", cause=original, retryable=True)

    assert error.cause is original
    assert error.__cause__ is original
    assert error.retryable is True


def test_to_log_string_includes_all_parts() -> None:
    error = LegitmarkError(
        ErrorCode.NOT_FOUND_ERROR,
        "Failed",
        context=ErrorContext(status_code=404, endpoint="/api/sr", request_id="abc-123"),
        suggestions=["Check the UUID"],
    )

    log = error.to_log_string()

    assert log == "[NOT_FOUND_ERROR] Failed | Status: 404 | Endpoint: /api/sr | RequestID: abc-123 | Suggestions: Check the UUID"


def test_to_log_string_without_context() -> None:
    error = LegitmarkError(ErrorCode.UNKNOWN_ERROR, "Something went wrong")

    assert error.to_log_string() == "[UNKNOWN_ERROR] Something went wrong"


def test_context_is_immutable() -> None:
    context = ErrorContext(status_code=500)

    with pytest.raises(AttributeError):
        context.status_code = 502  # type: ignore[misc]


def test_configuration_error_is_a_non_retryable_legitmark_error() -> None:
    error = ConfigurationError("Missing API key", ["Set LEGITMARK_API_KEY"])

    assert isinstance(error, LegitmarkError)
    assert error.code is ErrorCode.CONFIGURATION_ERROR
    assert error.retryable is False
    assert error.suggestions == ("Set LEGITMARK_API_KEY",)


@pytest.mark.parametrize("attribute", ["code", "message", "context", "retryable", "suggestions", "cause"])
def test_error_attributes_are_read_only(attribute: str) -> None:
    error = LegitmarkError(ErrorCode.SERVER_ERROR, "Down", retryable=True)

    with pytest.raises(AttributeError):
        setattr(error, attribute, None)

    assert error.code is ErrorCode.SERVER_ERROR
    assert error.retryable is True
