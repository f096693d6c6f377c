"""Classified exceptions surfaced by the request pipeline.

Every failure a caller can observe is one of the kinds listed in
:class:`ErrorKind`. Callers branch either on the exception class or on the
``kind`` attribute, e.g. a declined card versus an invalid parameter.
"""

import asyncio
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    import httpx


class ErrorKind(str, Enum):
    """Closed taxonomy of failures."""

    INVALID_PARAMETER = "invalid_parameter"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    RATE_LIMIT = "rate_limit"
    API = "api"
    CARD = "card"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT = "transport"
    CONFIGURATION = "configuration"
    CANCELLED = "cancelled"


class StripeError(Exception):
    """Base exception for every classified pipeline error.

    Attributes:
        message: Human-readable description (provider message when available).
        http_status: HTTP status of the response, if one was received.
        code: Provider-specific error code (e.g. ``card_declined``).
        param: Name of the offending parameter, if reported.
        decline_code: Issuer decline reason, set on card errors.
        request_id: Value of the ``Request-Id`` response header.
        json_body: Parsed response body, if any.
        response: The raw ``httpx.Response``, if any.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.API

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        code: str | None = None,
        param: str | None = None,
        decline_code: str | None = None,
        request_id: str | None = None,
        json_body: Any = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.code = code
        self.param = param
        self.decline_code = decline_code
        self.request_id = request_id
        self.json_body = json_body
        self.response = response

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, http_status={self.http_status!r}, "
            f"code={self.code!r}, request_id={self.request_id!r})"
        )


class APIError(StripeError):
    """Unclassified server-side failure or unknown error code."""

    kind = ErrorKind.API


class InvalidParameterError(StripeError):
    """Malformed or missing input, caught locally or reported by the API."""

    kind = ErrorKind.INVALID_PARAMETER


class AuthenticationError(StripeError):
    """Missing or invalid API key."""

    kind = ErrorKind.AUTHENTICATION


class PermissionDeniedError(StripeError):
    """The API key is valid but lacks access to the resource."""

    kind = ErrorKind.PERMISSION


class RateLimitError(StripeError):
    """Too many requests (429)."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class CardError(StripeError):
    """The card (or other payment method) was declined."""

    kind = ErrorKind.CARD

    def __init__(self, message: str, decline_code: str | None = None, **kwargs):
        super().__init__(message, decline_code=decline_code, **kwargs)


class MalformedResponseError(StripeError):
    """Response body could not be parsed into the expected shape."""

    kind = ErrorKind.MALFORMED_RESPONSE


class TransportError(StripeError):
    """Network, DNS, TLS or timeout failure after all retries were spent."""

    kind = ErrorKind.TRANSPORT


class ConfigurationError(StripeError):
    """No usable configuration, typically no API key."""

    kind = ErrorKind.CONFIGURATION


class RequestCancelledError(asyncio.CancelledError):
    """The awaiting task was cancelled while a request was in flight.

    Subclasses ``asyncio.CancelledError`` so task cancellation still
    propagates, and is never a :class:`TransportError`.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.CANCELLED

    def __init__(self, message: str, *, method: str | None = None, url: str | None = None):
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = url
