"""Stripe Client Core - the shared request pipeline behind the resource modules.

Each call runs through the same steps:
- Options resolution (per-call options over client-wide defaults)
- Request building (endpoint, method, bracket-encoded params)
- Dispatch with idempotency keys and retry/backoff
- Decoding into typed shapes, or a classified error
- Lazy pagination for list endpoints

Example:
    ```python
    from stripe_client_core import ClientConfig, StripeClient

    async with StripeClient(ClientConfig(api_key="sk_test_...")) as client:
        session = await client.checkout_sessions.retrieve(
            "cs_test_123", options={"expand": ["payment_intent"]}
        )
    ```
"""

__version__ = "0.1.0"

from stripe_client_core.client import StripeClient  # noqa: E402
from stripe_client_core.errors import (  # noqa: E402
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
from stripe_client_core.options import ClientConfig, RequestOptions  # noqa: E402
from stripe_client_core.pagination import ListCursor  # noqa: E402
from stripe_client_core.stripe_object import NOT_PRESENT, APIResource, ListObject, StripeObject  # noqa: E402
from stripe_client_core.transport import RetryPolicy  # noqa: E402

__all__ = [
    "APIError",
    "APIResource",
    "AuthenticationError",
    "CardError",
    "ClientConfig",
    "ConfigurationError",
    "ErrorKind",
    "InvalidParameterError",
    "ListCursor",
    "ListObject",
    "MalformedResponseError",
    "NOT_PRESENT",
    "PermissionDeniedError",
    "RateLimitError",
    "RequestCancelledError",
    "RequestOptions",
    "RetryPolicy",
    "StripeClient",
    "StripeError",
    "StripeObject",
    "TransportError",
    "__version__",
]
