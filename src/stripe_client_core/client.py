"""Client that runs every call through the request pipeline.

options -> request builder -> dispatcher -> decoder, with
:class:`~stripe_client_core.pagination.ListCursor` on top for list endpoints.

Example:
    ```python
    from stripe_client_core import ClientConfig, StripeClient

    async with StripeClient(ClientConfig.from_env()) as client:
        config = await client.billing_portal_configurations.create(
            {
                "business_profile": {"headline": "Acme"},
                "features": {"invoice_history": {"enabled": True}},
            }
        )
        async for session in client.checkout_sessions.list({"limit": 10}):
            print(session.id)
    ```
"""

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx

from stripe_client_core.decoding import decode_list_response, decode_response
from stripe_client_core.dispatch import dispatch
from stripe_client_core.options import ClientConfig, RequestOptions, resolve_options
from stripe_client_core.pagination import ListCursor
from stripe_client_core.request import RequestDescriptor, format_endpoint, new_request
from stripe_client_core.resources.billing_portal import ConfigurationService
from stripe_client_core.resources.checkout import SessionService
from stripe_client_core.stripe_object import ListObject, StripeObject
from stripe_client_core.transport import RetryPolicy, create_transport

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=StripeObject)

Options = RequestOptions | Mapping[str, Any] | None


class StripeClient:
    """Entry point for API calls.

    Args:
        config: Client-wide defaults. Loaded with ClientConfig.from_env()
            when omitted.
        transport: Underlying httpx transport (a MockTransport in tests).
        retry_policy: Backoff parameters for the retry transport.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        self.config = config if config is not None else ClientConfig.from_env()
        self._http = httpx.AsyncClient(
            transport=create_transport(
                transport,
                max_retries=self.config.max_network_retries,
                policy=retry_policy,
            )
        )
        self.billing_portal_configurations = ConfigurationService(self)
        self.checkout_sessions = SessionService(self)

    async def __aenter__(self) -> "StripeClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _build(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, Any] | None,
        options: Options,
        path_params: Mapping[str, Any] | None,
    ) -> RequestDescriptor:
        effective = resolve_options(self.config, options)
        return (
            new_request(effective)
            .put_endpoint(endpoint, **(path_params or {}))
            .put_method(method)
            .put_params(params)
            .build()
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        shape: type[T],
        params: Mapping[str, Any] | None = None,
        options: Options = None,
        *,
        path_params: Mapping[str, Any] | None = None,
    ) -> T:
        """Run one call and decode the response into ``shape``.

        Args:
            method: GET, POST, PUT or DELETE
            endpoint: Path relative to the API base, may hold ``{name}``
                placeholders filled from ``path_params``
            shape: StripeObject subclass to decode into
            params: Query (GET) or body (POST/PUT/DELETE) parameters
            options: Per-call RequestOptions or mapping
            path_params: Identifiers (strings or decoded resources)

        Raises:
            StripeError: A classified error; no partial value is returned
        """
        descriptor = self._build(method, endpoint, params, options, path_params)
        response = await dispatch(self._http, descriptor)
        return decode_response(response, shape)

    async def list_page(
        self,
        endpoint: str,
        item_shape: type[T],
        params: Mapping[str, Any] | None = None,
        options: Options = None,
        *,
        path_params: Mapping[str, Any] | None = None,
    ) -> ListObject[T]:
        """Fetch a single page of a list endpoint."""
        descriptor = self._build("GET", endpoint, params, options, path_params)
        response = await dispatch(self._http, descriptor)
        return decode_list_response(response, item_shape)

    def list(
        self,
        endpoint: str,
        item_shape: type[T],
        params: Mapping[str, Any] | None = None,
        options: Options = None,
        *,
        path_params: Mapping[str, Any] | None = None,
    ) -> ListCursor[T]:
        """Return a cursor over every item of a list endpoint.

        Identifiers are resolved immediately, so an empty id fails here rather
        than on first iteration. No request is made until iteration starts.
        """
        return ListCursor(self, format_endpoint(endpoint, path_params), item_shape, params, options)
