"""Classification of HTTP error responses."""

import logging

import httpx

from stripe_client_core.errors.exceptions import (
    APIError,
    AuthenticationError,
    CardError,
    ErrorKind,
    InvalidParameterError,
    PermissionDeniedError,
    RateLimitError,
    StripeError,
)
from stripe_client_core.errors.models import ErrorPayload

logger = logging.getLogger(__name__)

ERROR_CLASSES: dict[ErrorKind, type[StripeError]] = {
    ErrorKind.INVALID_PARAMETER: InvalidParameterError,
    ErrorKind.AUTHENTICATION: AuthenticationError,
    ErrorKind.PERMISSION: PermissionDeniedError,
    ErrorKind.RATE_LIMIT: RateLimitError,
    ErrorKind.CARD: CardError,
    ErrorKind.API: APIError,
}

# Provider error types, checked first
_TYPE_KINDS: dict[str, ErrorKind] = {
    "card_error": ErrorKind.CARD,
    "invalid_request_error": ErrorKind.INVALID_PARAMETER,
    "idempotency_error": ErrorKind.INVALID_PARAMETER,
    "authentication_error": ErrorKind.AUTHENTICATION,
    "rate_limit_error": ErrorKind.RATE_LIMIT,
    "api_error": ErrorKind.API,
}

# Fallback when the type is missing or unrecognized
_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.INVALID_PARAMETER,
    401: ErrorKind.AUTHENTICATION,
    402: ErrorKind.CARD,
    403: ErrorKind.PERMISSION,
    404: ErrorKind.INVALID_PARAMETER,
    409: ErrorKind.INVALID_PARAMETER,
    422: ErrorKind.INVALID_PARAMETER,
    429: ErrorKind.RATE_LIMIT,
}


def classify(status_code: int, error_type: str | None = None, code: str | None = None) -> ErrorKind:
    """Map an HTTP status and provider error type/code to an :class:`ErrorKind`.

    The provider type wins, except that ``invalid_request_error`` is also what
    the API reports for bad keys (401), missing scopes (403) and rate limits
    (429), where the status is more precise.

    Args:
        status_code: HTTP status code
        error_type: ``error.type`` from the payload, if any
        code: ``error.code`` from the payload, if any

    Returns:
        The error kind; unknown types and statuses map to ``ErrorKind.API``
    """
    if error_type == "invalid_request_error" and status_code in (401, 403, 429):
        return _STATUS_KINDS[status_code]

    if code == "rate_limit":
        return ErrorKind.RATE_LIMIT

    if isinstance(error_type, str) and error_type in _TYPE_KINDS:
        return _TYPE_KINDS[error_type]

    return _STATUS_KINDS.get(status_code, ErrorKind.API)


def build_error(response: httpx.Response) -> StripeError:
    """Build the classified exception for a non-2xx response.

    Args:
        response: HTTP response object

    Returns:
        StripeError subclass instance (not raised)
    """
    payload = ErrorPayload.from_response(response)
    status_code = response.status_code
    request_id = response.headers.get("request-id")

    kind = classify(
        status_code,
        payload.type if payload else None,
        payload.code if payload else None,
    )
    exc_class = ERROR_CLASSES[kind]

    if payload:
        message = payload.to_exception_message()
    else:
        # Body missing or without an error object, synthesize from the status
        response_text = response.text[:200]
        message = f"HTTP {status_code}: {response_text}" if response_text else f"HTTP {status_code}"

    try:
        json_body = response.json()
    except ValueError:
        json_body = None

    kwargs = {
        "http_status": status_code,
        "code": payload.code if payload else None,
        "param": payload.param if payload else None,
        "decline_code": payload.decline_code if payload else None,
        "request_id": request_id,
        "json_body": json_body,
        "response": response,
    }

    if exc_class is RateLimitError:
        retry_after = None
        if "retry-after" in response.headers:
            try:
                retry_after = int(response.headers["retry-after"])
            except (ValueError, TypeError):
                retry_after = None
        return RateLimitError(message, retry_after=retry_after, **kwargs)

    return exc_class(message, **kwargs)


def raise_for_status(response: httpx.Response) -> None:
    """Raise the classified exception for an error response.

    Args:
        response: HTTP response object

    Raises:
        StripeError subclass based on the error payload and status code
    """
    if response.is_success:
        return

    error = build_error(response)
    logger.error(
        f"API error: {response.status_code} {error.kind.value} | Code: {error.code or 'N/A'} | "
        f"Request-Id: {error.request_id or 'N/A'} | Message: {error.message}"
    )
    raise error
