"""Tests for header construction and sending descriptors."""

from urllib.parse import parse_qsl

import httpx
import pytest

from stripe_client_core.dispatch import USER_AGENT, build_headers, build_http_request, dispatch
from stripe_client_core.encoding import decode_params
from stripe_client_core.errors import TransportError
from stripe_client_core.options import ClientConfig, RequestOptions, resolve_options
from stripe_client_core.request import new_request
from stripe_client_core.transport.retry import MAX_RETRIES_EXTENSION


def make_descriptor(method, endpoint="checkout/sessions", params=None, **options):
    effective = resolve_options(ClientConfig(api_key="sk_test_123"), RequestOptions(**options))
    return new_request(effective).put_endpoint(endpoint).put_method(method).put_params(params).build()


class TestBuildHeaders:
    @pytest.mark.unit
    def test_standard_headers(self):
        headers = build_headers(make_descriptor("GET"))

        assert headers["Authorization"] == "Bearer sk_test_123"
        assert headers["Stripe-Version"] == "2020-08-27"
        assert headers["User-Agent"] == USER_AGENT
        assert headers["Accept"] == "application/json"
        assert "Stripe-Account" not in headers
        assert "Idempotency-Key" not in headers

    @pytest.mark.unit
    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
    def test_mutating_methods_get_generated_key(self, method):
        headers = build_headers(make_descriptor(method))

        assert len(headers["Idempotency-Key"]) == 36

    @pytest.mark.unit
    def test_each_build_generates_a_new_key(self):
        descriptor = make_descriptor("POST")

        assert build_headers(descriptor)["Idempotency-Key"] != build_headers(descriptor)["Idempotency-Key"]

    @pytest.mark.unit
    def test_explicit_key_and_account(self):
        headers = build_headers(make_descriptor("GET", idempotency_key="idem-1", stripe_account="acct_1"))

        assert headers["Idempotency-Key"] == "idem-1"
        assert headers["Stripe-Account"] == "acct_1"


class TestBuildHttpRequest:
    @pytest.mark.unit
    async def test_get_params_in_query(self):
        async with httpx.AsyncClient() as http_client:
            request = build_http_request(
                http_client, make_descriptor("GET", params={"limit": 3, "expand": ["data.customer"]})
            )

        assert request.url.path == "/v1/checkout/sessions"
        assert decode_params(request.url.params.multi_items()) == {"limit": "3", "expand": ["data.customer"]}
        assert request.content == b""

    @pytest.mark.unit
    async def test_post_params_in_form_body(self):
        params = {"mode": "payment", "line_items": [{"price": "price_1", "quantity": 1}]}

        async with httpx.AsyncClient() as http_client:
            request = build_http_request(http_client, make_descriptor("POST", params=params))

        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert not request.url.query
        assert decode_params(parse_qsl(request.content.decode())) == {
            "mode": "payment",
            "line_items": [{"price": "price_1", "quantity": "1"}],
        }

    @pytest.mark.unit
    async def test_delete_params_in_form_body(self):
        async with httpx.AsyncClient() as http_client:
            request = build_http_request(
                http_client, make_descriptor("DELETE", endpoint="checkout/sessions/cs_1", params={"a": "1"})
            )

        assert request.method == "DELETE"
        assert str(request.url) == "https://api.stripe.com/v1/checkout/sessions/cs_1"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.content == b"a=1"

    @pytest.mark.unit
    async def test_retry_count_and_timeout_travel_with_request(self):
        async with httpx.AsyncClient() as http_client:
            request = build_http_request(http_client, make_descriptor("GET", max_network_retries=4))

        assert request.extensions[MAX_RETRIES_EXTENSION] == 4
        assert request.extensions["timeout"]["read"] == 80.0


class TestDispatch:
    @pytest.mark.unit
    async def test_error_status_is_returned_not_raised(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": {"type": "api_error"}}))

        async with httpx.AsyncClient(transport=transport) as http_client:
            response = await dispatch(http_client, make_descriptor("GET"))

        assert response.status_code == 500

    @pytest.mark.unit
    async def test_network_failure_becomes_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            with pytest.raises(TransportError) as exc_info:
                await dispatch(http_client, make_descriptor("POST"))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert "ConnectError" in exc_info.value.message
