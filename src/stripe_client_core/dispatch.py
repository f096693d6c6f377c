"""Send a request descriptor over HTTP.

Authentication, versioning and idempotency headers are attached here. The
``httpx.Request`` is built once per logical call; retries happen inside the
client's :class:`~stripe_client_core.transport.retry.StripeRetry` transport
and resend that same request, so a generated idempotency key is stable across
every attempt of one call.
"""

import asyncio
import logging
import uuid
from urllib.parse import urlencode

import httpx

from stripe_client_core import __version__
from stripe_client_core.errors.exceptions import RequestCancelledError, TransportError
from stripe_client_core.request import RequestDescriptor
from stripe_client_core.transport.retry import MAX_RETRIES_EXTENSION

logger = logging.getLogger(__name__)

USER_AGENT = f"stripe-client-core/{__version__}"

# Methods that change state and therefore carry an idempotency key
MUTATING_METHODS: frozenset[str] = frozenset(["POST", "PUT", "DELETE"])


def build_headers(descriptor: RequestDescriptor) -> dict[str, str]:
    """Headers for a descriptor, generating an idempotency key if needed."""
    options = descriptor.options
    headers = {
        "Authorization": f"Bearer {options.api_key}",
        "Stripe-Version": options.api_version,
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }
    if options.stripe_account:
        headers["Stripe-Account"] = options.stripe_account

    idempotency_key = options.idempotency_key
    if idempotency_key is None and descriptor.method in MUTATING_METHODS:
        idempotency_key = str(uuid.uuid4())
    if idempotency_key is not None:
        headers["Idempotency-Key"] = idempotency_key

    # Explicit per-request headers win
    headers.update(descriptor.headers)
    return headers


def build_http_request(http_client: httpx.AsyncClient, descriptor: RequestDescriptor) -> httpx.Request:
    """Serialize a descriptor into an ``httpx.Request``."""
    headers = build_headers(descriptor)
    pairs = descriptor.encoded_params
    extensions = {MAX_RETRIES_EXTENSION: descriptor.options.max_network_retries}

    if descriptor.uses_query_string:
        return http_client.build_request(
            descriptor.method,
            descriptor.url,
            params=pairs,
            headers=headers,
            timeout=descriptor.options.timeout,
            extensions=extensions,
        )

    headers["Content-Type"] = "application/x-www-form-urlencoded"
    return http_client.build_request(
        descriptor.method,
        descriptor.url,
        content=urlencode(pairs),
        headers=headers,
        timeout=descriptor.options.timeout,
        extensions=extensions,
    )


async def dispatch(http_client: httpx.AsyncClient, descriptor: RequestDescriptor) -> httpx.Response:
    """Send a descriptor and return the raw response.

    Non-2xx responses are returned, not raised; classifying them is the
    decoder's job.

    Raises:
        TransportError: If the network failed on every attempt
        RequestCancelledError: If the awaiting task was cancelled
    """
    request = build_http_request(http_client, descriptor)
    logger.debug(f"Request {request.method} {request.url}")

    try:
        response = await http_client.send(request)
    except asyncio.CancelledError as e:
        logger.debug(f"Request {request.method} {request.url} cancelled")
        raise RequestCancelledError(
            f"Request {request.method} {request.url} was cancelled",
            method=request.method,
            url=str(request.url),
        ) from e
    except httpx.TransportError as e:
        raise TransportError(
            f"Request {request.method} {request.url} failed after "
            f"{descriptor.options.max_network_retries} retries: {type(e).__name__}: {e}"
        ) from e

    logger.debug(
        f"Response {response.status_code} for {request.method} {request.url} "
        f"(Request-Id: {response.headers.get('request-id', 'N/A')})"
    )
    return response
