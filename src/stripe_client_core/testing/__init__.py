"""Testing utilities for code built on the request pipeline.

Factories for API-shaped payloads and ``httpx`` responses, to be served from
an ``httpx.MockTransport`` handler.

Example:
    ```python
    from stripe_client_core.testing import create_error_response


    async def handler(request):
        return create_error_response(402, error_type="card_error", code="card_declined")
    ```
"""

from collections.abc import Sequence
from typing import Any

import httpx


def create_mock_response(
    payload: Any,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    request_id: str | None = "req_test",
) -> httpx.Response:
    """JSON response with an optional ``Request-Id`` header."""
    response_headers = dict(headers or {})
    if request_id is not None:
        response_headers.setdefault("Request-Id", request_id)
    return httpx.Response(status_code, json=payload, headers=response_headers)


def create_error_response(
    status_code: int,
    *,
    error_type: str | None = None,
    code: str | None = None,
    message: str | None = None,
    param: str | None = None,
    decline_code: str | None = None,
    headers: dict[str, str] | None = None,
    request_id: str | None = "req_test",
) -> httpx.Response:
    """Error response carrying an ``{"error": {...}}`` envelope."""
    error = {
        key: value
        for key, value in {
            "type": error_type,
            "code": code,
            "message": message,
            "param": param,
            "decline_code": decline_code,
        }.items()
        if value is not None
    }
    return create_mock_response({"error": error}, status_code, headers=headers, request_id=request_id)


def create_list_payload(
    items: Sequence[dict[str, Any]],
    *,
    has_more: bool = False,
    url: str = "/v1/list",
) -> dict[str, Any]:
    """List envelope as returned by list endpoints."""
    return {"object": "list", "data": list(items), "has_more": has_more, "url": url}


__all__ = ["create_error_response", "create_list_payload", "create_mock_response"]
