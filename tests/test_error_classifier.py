"""Tests de classification des échecs de transport (statuts HTTP, timeouts, réseau)."""

from __future__ import annotations

import httpx
import pytest

from legitmark.classify import classify_failure, classify_http_error
from legitmark.errors import ErrorCode, LegitmarkError


@pytest.mark.parametrize(
    ("status", "code", "retryable"),
    [
        (400, ErrorCode.VALIDATION_ERROR, False),
        (401, ErrorCode.AUTHENTICATION_ERROR, False),
        (403, ErrorCode.AUTHENTICATION_ERROR, False),
        (404, ErrorCode.NOT_FOUND_ERROR, False),
        (422, ErrorCode.VALIDATION_ERROR, False),
        (429, ErrorCode.RATE_LIMIT_ERROR, True),
        (500, ErrorCode.SERVER_ERROR, True),
        (502, ErrorCode.SERVER_ERROR, True),
        (503, ErrorCode.SERVER_ERROR, True),
        (504, ErrorCode.TIMEOUT_ERROR, True),
        (418, ErrorCode.UNKNOWN_ERROR, False),
    ],
)
def test_status_code_mapping(status: int, code: ErrorCode, retryable: bool) -> None:
    error = classify_failure(status_code=status, endpoint="/api/v2/sr")

    assert error.code is code
    assert error.retryable is retryable
    assert error.context.status_code == status
    assert error.context.endpoint == "/api/v2/sr"


def test_no_response_timeout_is_timeout_error() -> None:
    error = classify_failure(status_code=None, timed_out=True, message="timed out")

    assert error.code is ErrorCode.TIMEOUT_ERROR
    assert error.retryable is True
    assert error.context.status_code is None


def test_no_response_other_reason_is_network_error() -> None:
    error = classify_failure(status_code=None, message="connection refused")

    assert error.code is ErrorCode.NETWORK_ERROR
    assert error.retryable is True
    assert str(error) == "connection refused"


def test_validation_field_errors_become_suggestions() -> None:
    body = {
        "success": False,
        "error": {
            "code": 400,
            "timestamp": "2026-02-06T04:48:00.000Z",
            "message": "Validation failed",
            "errors": [
                {"code": "validation/missing-field", "message": "item.category is required"},
                {"code": "validation/missing-field", "message": "item.type is required"},
            ],
        },
    }

    error = classify_failure(status_code=400, body=body)

    assert error.code is ErrorCode.VALIDATION_ERROR
    assert str(error) == "Validation failed"
    assert error.suggestions == ("item.category is required", "item.type is required")
    assert error.context.details["code"] == 400


def test_request_id_and_retry_after_are_read_from_headers() -> None:
    error = classify_failure(
        status_code=429,
        body={"error": {"message": "Rate limit exceeded. Retry after 60 seconds."}},
        headers={"X-Amzn-RequestId": "amzn-1", "Retry-After": "60"},
    )

    assert error.code is ErrorCode.RATE_LIMIT_ERROR
    assert error.context.request_id == "amzn-1"
    assert error.context.details["retry_after_s"] == 60.0
    assert "Rate limit exceeded" in str(error)


def test_x_request_id_preferred_over_amazon_header() -> None:
    error = classify_failure(
        status_code=500,
        headers={"x-request-id": "req-1", "x-amzn-requestid": "amzn-1"},
    )

    assert error.context.request_id == "req-1"


def test_classify_http_status_error_from_httpx() -> None:
    request = httpx.Request("GET", "https://api.legitmark.test/api/v2/sr/x")
    response = httpx.Response(
        404,
        json={"success": False, "error": {"code": 404, "message": "Service request not found"}},
        headers={"x-request-id": "req-404"},
        request=request,
    )
    exc = httpx.HTTPStatusError("404 Not Found", request=request, response=response)

    error = classify_http_error(exc, "/api/v2/sr/x")

    assert error.code is ErrorCode.NOT_FOUND_ERROR
    assert str(error) == "Service request not found"
    assert error.context.request_id == "req-404"
    assert error.cause is exc


def test_classify_httpx_timeout_and_connect_errors() -> None:
    request = httpx.Request("GET", "https://api.legitmark.test/")

    timeout = classify_http_error(httpx.ReadTimeout("read timed out", request=request), "/")
    network = classify_http_error(httpx.ConnectError("refused", request=request), "/")

    assert timeout.code is ErrorCode.TIMEOUT_ERROR
    assert network.code is ErrorCode.NETWORK_ERROR
    assert timeout.retryable and network.retryable


def test_legitmark_error_passes_through_unchanged() -> None:
    original = LegitmarkError(ErrorCode.TIMEOUT_ERROR, "nested", retryable=True)

    assert classify_http_error(original, "/x") is original


def test_unexpected_exception_is_unknown_error() -> None:
    exc = RuntimeError("boom")

    error = classify_http_error(exc, "/x")

    assert error.code is ErrorCode.UNKNOWN_ERROR
    assert error.retryable is False
    assert error.cause is exc
