"""Transport layer for the request pipeline.

The retry logic wraps an ``httpx`` transport, so the same request object,
headers included, is resent on every attempt.

Example:
    ```python
    from stripe_client_core.transport import create_transport

    transport = create_transport(max_retries=2)
    ```
"""

import httpx

from stripe_client_core.transport.retry import MAX_RETRIES_EXTENSION, RetryPolicy, StripeRetry


def create_transport(
    wrapped_transport: httpx.AsyncBaseTransport | None = None,
    *,
    max_retries: int = 2,
    policy: RetryPolicy | None = None,
) -> StripeRetry:
    """Wrap ``wrapped_transport`` (default: a real HTTP transport) with retries."""
    return StripeRetry(
        wrapped_transport=wrapped_transport or httpx.AsyncHTTPTransport(),
        max_retries=max_retries,
        policy=policy,
    )


__all__ = ["MAX_RETRIES_EXTENSION", "RetryPolicy", "StripeRetry", "create_transport"]
