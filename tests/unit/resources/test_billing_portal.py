"""Tests for the portal configuration service."""

import httpx
import pytest

from stripe_client_core.encoding import decode_params
from stripe_client_core.resources import Configuration
from stripe_client_core.testing import create_list_payload, create_mock_response

CONFIGURATION = {
    "id": "bpc_1",
    "object": "billing_portal.configuration",
    "active": True,
    "business_profile": {"headline": "Acme"},
    "features": {
        "subscription_cancel": {"enabled": True, "mode": "at_period_end", "proration_behavior": "none"},
        "subscription_update": {
            "enabled": True,
            "default_allowed_updates": ["price"],
            "products": [{"product": "prod_1", "prices": ["price_1", "price_2"]}],
            "proration_behavior": "create_prorations",
        },
    },
    "is_default": True,
}


def recording_handler(payload):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return create_mock_response(payload)

    return handler, seen


@pytest.mark.unit
async def test_retrieve(make_client):
    handler, seen = recording_handler(CONFIGURATION)

    async with make_client(handler) as client:
        configuration = await client.billing_portal_configurations.retrieve("bpc_1")

    assert seen[0].method == "GET"
    assert seen[0].url.path == "/v1/billing_portal/configurations/bpc_1"
    assert configuration.features.subscription_cancel.mode == "at_period_end"
    assert configuration.features.subscription_update.products[0].prices == ["price_1", "price_2"]
    assert configuration.is_default is True


@pytest.mark.unit
async def test_update_with_decoded_configuration(make_client):
    handler, seen = recording_handler({**CONFIGURATION, "active": False})
    existing = Configuration(id="bpc_1", object="billing_portal.configuration")

    async with make_client(handler) as client:
        configuration = await client.billing_portal_configurations.update(existing, {"active": False})

    request = seen[0]
    assert request.method == "PUT"
    assert request.url.path == "/v1/billing_portal/configurations/bpc_1"
    assert decode_params(httpx.QueryParams(request.content.decode()).multi_items()) == {"active": "false"}
    assert "Idempotency-Key" in request.headers
    assert configuration.active is False


@pytest.mark.unit
async def test_list(make_client):
    handler, seen = recording_handler(create_list_payload([CONFIGURATION]))

    async with make_client(handler) as client:
        configurations = await client.billing_portal_configurations.list({"is_default": True}).to_list()

    assert seen[0].url.path == "/v1/billing_portal/configurations"
    assert seen[0].url.params["is_default"] == "true"
    assert [configuration.id for configuration in configurations] == ["bpc_1"]
