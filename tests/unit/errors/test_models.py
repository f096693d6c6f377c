"""Tests for the API error envelope."""

import pytest
from httpx import Response

from stripe_client_core.errors.models import ErrorPayload


@pytest.mark.unit
def test_parse_error_envelope():
    response = Response(
        status_code=402,
        json={
            "error": {
                "type": "card_error",
                "code": "card_declined",
                "decline_code": "generic_decline",
                "message": "Your card was declined.",
                "param": "payment_method",
                "doc_url": "https://stripe.com/docs/error-codes/card-declined",
            }
        },
    )

    payload = ErrorPayload.from_response(response)

    assert payload is not None
    assert payload.type == "card_error"
    assert payload.code == "card_declined"
    assert payload.decline_code == "generic_decline"
    assert payload.message == "Your card was declined."
    assert payload.param == "payment_method"
    assert payload.doc_url == "https://stripe.com/docs/error-codes/card-declined"
    assert payload.extensions is None


@pytest.mark.unit
def test_unknown_members_become_extensions():
    response = Response(
        status_code=400,
        json={"error": {"type": "invalid_request_error", "message": "Bad", "payment_intent": {"id": "pi_1"}}},
    )

    payload = ErrorPayload.from_response(response)

    assert payload.extensions == {"payment_intent": {"id": "pi_1"}}


@pytest.mark.unit
def test_oauth_style_error():
    response = Response(
        status_code=400,
        json={"error": "invalid_grant", "error_description": "Authorization code expired"},
    )

    payload = ErrorPayload.from_response(response)

    assert payload.code == "invalid_grant"
    assert payload.message == "Authorization code expired"


@pytest.mark.unit
@pytest.mark.parametrize(
    "response",
    [
        Response(status_code=500, text="<html>Bad Gateway</html>"),
        Response(status_code=500, json={"message": "no envelope"}),
        Response(status_code=500, json=["not", "an", "object"]),
        Response(status_code=500),
    ],
)
def test_non_envelope_bodies_return_none(response):
    assert ErrorPayload.from_response(response) is None


@pytest.mark.unit
def test_to_exception_message():
    assert ErrorPayload(message="Your card was declined.").to_exception_message() == "Your card was declined."
    assert ErrorPayload(code="resource_missing").to_exception_message() == "Request failed with code resource_missing"
    assert ErrorPayload(type="api_error").to_exception_message() == "Request failed with api_error"
    assert ErrorPayload().to_exception_message() == "Unknown API error"


@pytest.mark.unit
def test_non_string_members_are_ignored():
    payload = ErrorPayload.from_body({"error": {"type": ["weird"], "code": {"x": 1}, "message": 42, "param": "amount"}})

    assert payload is not None
    assert payload.type is None
    assert payload.code is None
    assert payload.message is None
    assert payload.param == "amount"
