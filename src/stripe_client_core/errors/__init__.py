"""Error taxonomy and response classification."""

from stripe_client_core.errors.exceptions import (
    APIError,
    AuthenticationError,
    CardError,
    ConfigurationError,
    ErrorKind,
    InvalidParameterError,
    MalformedResponseError,
    PermissionDeniedError,
    RateLimitError,
    RequestCancelledError,
    StripeError,
    TransportError,
)
from stripe_client_core.errors.handler import build_error, classify, raise_for_status
from stripe_client_core.errors.models import ErrorPayload

__all__ = [
    "APIError",
    "AuthenticationError",
    "CardError",
    "ConfigurationError",
    "ErrorKind",
    "ErrorPayload",
    "InvalidParameterError",
    "MalformedResponseError",
    "PermissionDeniedError",
    "RateLimitError",
    "RequestCancelledError",
    "StripeError",
    "TransportError",
    "build_error",
    "classify",
    "raise_for_status",
]
