"""Classification des échecs de transport en LegitmarkError.

Règles (la première qui s'applique gagne) :

- pas de réponse, délai client dépassé      -> TIMEOUT_ERROR (relançable)
- pas de réponse, autre cause réseau         -> NETWORK_ERROR (relançable)
- 401 / 403                                  -> AUTHENTICATION_ERROR
- 404                                        -> NOT_FOUND_ERROR
- 400 / 422                                  -> VALIDATION_ERROR (erreurs de champ -> suggestions)
- 429                                        -> RATE_LIMIT_ERROR (relançable)
- 504                                        -> TIMEOUT_ERROR (relançable)
- >= 500                                     -> SERVER_ERROR (relançable)
- autre                                      -> UNKNOWN_ERROR
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from legitmark.errors import ErrorCode, ErrorContext, LegitmarkError

_REQUEST_ID_HEADERS = ("x-request-id", "x-amzn-requestid")


def _lower_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    return {str(k).lower(): str(v) for k, v in headers.items()}


def _parse_retry_after_seconds(headers: Mapping[str, str]) -> float | None:
    """Parse Retry-After en secondes (format numérique uniquement)."""
    raw = (headers.get("retry-after") or "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if value < 0:
        return None
    return value


def _api_error(body: Any) -> Mapping[str, Any] | None:
    if not isinstance(body, Mapping):
        return None
    error = body.get("error")
    return error if isinstance(error, Mapping) else None


def _field_error_messages(api_error: Mapping[str, Any] | None) -> list[str]:
    if not api_error:
        return []
    errors = api_error.get("errors")
    if not isinstance(errors, list):
        return []
    messages: list[str] = []
    for item in errors:
        if isinstance(item, Mapping) and item.get("message"):
            messages.append(str(item["message"]))
    return messages


def classify_failure(
    *,
    status_code: int | None,
    body: Any = None,
    headers: Mapping[str, str] | None = None,
    timed_out: bool = False,
    endpoint: str | None = None,
    message: str = "",
    cause: BaseException | None = None,
) -> LegitmarkError:
    """
    Construit l'erreur typée correspondant à un échec de transport.

    status_code : None si aucune réponse n'a été reçue.
    body : corps JSON décodé de la réponse (peut contenir `error.message` et `error.errors`).
    timed_out : True si l'échec sans réponse vient du délai côté client.
    """
    lowered = _lower_headers(headers)
    api_error = _api_error(body)
    api_message = api_error.get("message") if api_error else None
    final_message = str(api_message or message or f"Request to {endpoint or 'API'} failed")

    retryable = False
    suggestions: list[str] = []
    details: dict[str, Any] = dict(api_error) if api_error else {}

    if status_code is None and timed_out:
        code = ErrorCode.TIMEOUT_ERROR
        retryable = True
        suggestions = ["Increase the timeout value", "Check network latency"]
    elif status_code is None:
        code = ErrorCode.NETWORK_ERROR
        retryable = True
        suggestions = ["Check your internet connection", "Verify the API URL is correct"]
    elif status_code == 401:
        code = ErrorCode.AUTHENTICATION_ERROR
        suggestions = ["Check that your API key is valid", "Ensure the API key has not expired"]
    elif status_code == 403:
        code = ErrorCode.AUTHENTICATION_ERROR
        suggestions = ["Verify your API key has the required permissions"]
    elif status_code == 404:
        code = ErrorCode.NOT_FOUND_ERROR
        suggestions = ["Check that the resource UUID is correct"]
    elif status_code in (400, 422):
        code = ErrorCode.VALIDATION_ERROR
        suggestions = _field_error_messages(api_error)
    elif status_code == 429:
        code = ErrorCode.RATE_LIMIT_ERROR
        retryable = True
        suggestions = ["Wait before retrying", "Consider implementing exponential backoff"]
        retry_after = _parse_retry_after_seconds(lowered)
        if retry_after is not None:
            details["retry_after_s"] = retry_after
    elif status_code == 504:
        code = ErrorCode.TIMEOUT_ERROR
        retryable = True
        suggestions = ["The upstream server timed out", "Retry after a short delay"]
    elif status_code >= 500:
        code = ErrorCode.SERVER_ERROR
        retryable = True
        suggestions = ["The service may be temporarily unavailable", "Retry after a short delay"]
    else:
        code = ErrorCode.UNKNOWN_ERROR

    request_id = next((lowered[h] for h in _REQUEST_ID_HEADERS if lowered.get(h)), None)
    return LegitmarkError(
        code,
        final_message,
        context=ErrorContext(
            status_code=status_code,
            endpoint=endpoint,
            request_id=request_id,
            details=details,
        ),
        retryable=retryable,
        suggestions=suggestions,
        cause=cause,
    )


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def classify_http_error(error: BaseException, endpoint: str | None = None) -> LegitmarkError:
    """Adapte une exception httpx (ou autre) en LegitmarkError ; une LegitmarkError passe telle quelle."""
    if isinstance(error, LegitmarkError):
        return error
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return classify_failure(
            status_code=response.status_code,
            body=_response_body(response),
            headers=response.headers,
            endpoint=endpoint,
            message=str(error),
            cause=error,
        )
    if isinstance(error, httpx.TimeoutException):
        return classify_failure(
            status_code=None,
            timed_out=True,
            endpoint=endpoint,
            message=str(error),
            cause=error,
        )
    if isinstance(error, httpx.TransportError):
        return classify_failure(
            status_code=None,
            endpoint=endpoint,
            message=str(error),
            cause=error,
        )
    return LegitmarkError(
        ErrorCode.UNKNOWN_ERROR,
        str(error) or type(error).__name__,
        context=ErrorContext(endpoint=endpoint),
        cause=error,
    )
