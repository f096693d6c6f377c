"""Retry transport for the API's network and server failures.

Every method is retried, because the dispatcher attaches an
``Idempotency-Key`` to each mutating request and the transport resends the
very same ``httpx.Request``, so a retried POST is applied at most once.

| Failure | Retried |
|---------|---------|
| Connection error, timeout (``httpx.TransportError``) | Yes |
| 429 Too Many Requests | Yes, honouring ``Retry-After`` |
| 5xx | Yes, honouring ``Retry-After`` |
| Any other 4xx | No |

## Example

```python
from stripe_client_core.transport.retry import RetryPolicy, StripeRetry
import httpx

retry_transport = StripeRetry(
    wrapped_transport=httpx.AsyncHTTPTransport(),
    max_retries=2,
    policy=RetryPolicy(initial_delay=0.5, max_delay=8.0),
)

async with httpx.AsyncClient(transport=retry_transport) as client:
    response = await client.post("https://api.stripe.com/v1/checkout/sessions", data={...})
```

A single request may override the retry count through
``request.extensions["max_network_retries"]``.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

logger = logging.getLogger(__name__)

MAX_RETRIES_EXTENSION = "max_network_retries"


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff parameters.

    Attributes:
        initial_delay: Delay before the first retry, in seconds.
        max_delay: Cap on the computed exponential delay.
        jitter: Fraction of the computed delay that is randomized away
            (0 disables jitter).
        max_retry_after: Cap on a server-provided ``Retry-After``.
    """

    initial_delay: float = 0.5
    max_delay: float = 8.0
    jitter: float = 0.5
    max_retry_after: float = 60.0

    def should_retry_status(self, status_code: int) -> bool:
        return status_code == 429 or 500 <= status_code < 600

    def backoff_delay(self, retry_number: int) -> float:
        """Exponential delay for a 1-indexed retry, capped, with jitter.

        Uses formula: min(initial_delay * 2 ** (retry_number - 1), max_delay),
        scaled by a uniform factor in [1 - jitter, 1].
        """
        delay = min(self.initial_delay * (2 ** (retry_number - 1)), self.max_delay)
        return delay * (1 - self.jitter * random.random())

    def parse_retry_after(self, response: httpx.Response) -> float | None:
        """Parse ``Retry-After`` (delay-seconds or HTTP-date).

        Returns:
            Delay in seconds capped at ``max_retry_after``, or None if the
            header is missing, invalid or in the past
        """
        retry_after = response.headers.get("Retry-After")
        if not retry_after:
            return None

        try:
            delay = float(retry_after)
            if delay < 0:
                return None
            return min(delay, self.max_retry_after)
        except ValueError:
            pass

        try:
            retry_date = parsedate_to_datetime(retry_after)
            delay = (retry_date - datetime.now(UTC)).total_seconds()
            if delay < 0:
                return None
            return min(delay, self.max_retry_after)
        except (ValueError, TypeError):
            return None


class StripeRetry(httpx.AsyncBaseTransport):
    """Transport wrapper that retries network failures, 429 and 5xx.

    Args:
        wrapped_transport: The underlying transport to wrap
        max_retries: Default number of retries after the first attempt
        policy: Backoff parameters (default: RetryPolicy())
    """

    def __init__(
        self,
        *,
        wrapped_transport: httpx.AsyncBaseTransport,
        max_retries: int = 2,
        policy: RetryPolicy | None = None,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.max_retries = max_retries
        self.policy = policy or RetryPolicy()

    async def __aenter__(self):
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, retrying per the policy.

        Returns:
            The last response received, which may be an error status

        Raises:
            httpx.TransportError: If the final attempt fails at the network level
        """
        max_retries = request.extensions.get(MAX_RETRIES_EXTENSION, self.max_retries)
        retries = 0

        while True:
            try:
                response = await self._wrapped_transport.handle_async_request(request)
            except httpx.TransportError as e:
                if retries >= max_retries:
                    raise

                retries += 1
                delay = self.policy.backoff_delay(retries)
                logger.warning(
                    f"Request {request.method} {request.url} failed with {type(e).__name__}: {e}, "
                    f"retrying in {delay:.2f}s (attempt {retries}/{max_retries})"
                )
                await asyncio.sleep(delay)
                continue

            if retries >= max_retries or not self.policy.should_retry_status(response.status_code):
                return response

            retries += 1
            delay = self.policy.parse_retry_after(response)
            if delay is None:
                delay = self.policy.backoff_delay(retries)

            logger.warning(
                f"Request {request.method} {request.url} failed with {response.status_code}, "
                f"retrying in {delay:.2f}s (attempt {retries}/{max_retries})"
            )
            await response.aclose()
            await asyncio.sleep(delay)
