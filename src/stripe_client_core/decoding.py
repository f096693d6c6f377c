"""Turn API responses into typed shapes.

Decoding is driven only by the declared field kinds (see
:mod:`stripe_client_core.stripe_object`). Unknown keys in the payload are
ignored so newer API versions do not break older shapes. Expandable fields
are resolved by the shape of the raw value: a string stays an id, an object
is decoded as the declared nested shape.
"""

import logging
from collections.abc import Mapping
from dataclasses import fields
from typing import Any, TypeVar

import httpx

from stripe_client_core.errors.exceptions import MalformedResponseError
from stripe_client_core.errors.handler import raise_for_status
from stripe_client_core.stripe_object import FieldKind, ListObject, StripeObject, field_kind

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=StripeObject)


def decode(payload: Any, shape: type[T], path: str = "") -> T:
    """Decode a parsed JSON object into ``shape``.

    Args:
        payload: Parsed JSON (must be an object)
        shape: StripeObject subclass to build
        path: Location of ``payload`` in the response, used in error messages

    Raises:
        MalformedResponseError: If the payload does not fit the declared kinds
    """
    if not isinstance(payload, Mapping):
        raise MalformedResponseError(
            f"Expected an object for {shape.__name__} at {path or '<root>'}, got {type(payload).__name__}"
        )

    values = {}
    for f in fields(shape):
        if f.name not in payload:
            continue
        field_path = f"{path}.{f.name}" if path else f.name
        values[f.name] = _decode_field(payload[f.name], field_kind(f), f.metadata.get("shape"), field_path)

    return shape(**values)


def decode_list(payload: Any, item_shape: type[T] | None, path: str = "") -> ListObject[T]:
    """Decode a ``{"object": "list", "data": [...]}`` envelope.

    Raises:
        MalformedResponseError: If ``data`` is missing or not an array
    """
    if not isinstance(payload, Mapping):
        raise MalformedResponseError(f"Expected a list object at {path or '<root>'}, got {type(payload).__name__}")

    data = payload.get("data")
    if not isinstance(data, list):
        raise MalformedResponseError(f"List object at {path or '<root>'} has no data array")

    data_path = f"{path}.data" if path else "data"
    return ListObject(
        object=payload.get("object", "list"),
        data=_decode_items(data, item_shape, data_path),
        has_more=bool(payload.get("has_more", False)),
        url=payload.get("url"),
    )


def _decode_items(raw: list, item_shape: type | None, path: str) -> list:
    if item_shape is None:
        return list(raw)
    return [
        None if item is None else decode(item, item_shape, f"{path}[{index}]")
        for index, item in enumerate(raw)
    ]


def _decode_field(raw: Any, kind: FieldKind, shape: type | None, path: str) -> Any:
    if raw is None:
        return None

    if kind is FieldKind.SCALAR:
        return raw

    if kind is FieldKind.NESTED:
        return decode(raw, shape, path)

    if kind is FieldKind.EXPANDABLE:
        if isinstance(raw, str):
            return raw
        if isinstance(raw, Mapping):
            return decode(raw, shape, path)
        raise MalformedResponseError(
            f"Expected an id or an object at {path}, got {type(raw).__name__}"
        )

    # FieldKind.LIST
    if isinstance(raw, Mapping) and raw.get("object") == "list":
        return decode_list(raw, shape, path)
    if isinstance(raw, list):
        return _decode_items(raw, shape, path)
    raise MalformedResponseError(f"Expected an array at {path}, got {type(raw).__name__}")


def _parse_body(response: httpx.Response) -> dict[str, Any]:
    """Classify error statuses, then parse a success body as a JSON object."""
    raise_for_status(response)

    request_id = response.headers.get("request-id")
    try:
        body = response.json()
    except ValueError as e:
        raise MalformedResponseError(
            f"Response body is not valid JSON (HTTP {response.status_code})",
            http_status=response.status_code,
            request_id=request_id,
            response=response,
        ) from e

    if not isinstance(body, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(body).__name__}",
            http_status=response.status_code,
            request_id=request_id,
            json_body=body,
            response=response,
        )
    return body


def _attach_response(error: MalformedResponseError, response: httpx.Response, body: Any) -> None:
    error.http_status = response.status_code
    error.request_id = response.headers.get("request-id")
    error.json_body = body
    error.response = response


def decode_response(response: httpx.Response, shape: type[T]) -> T:
    """Decode a single-object response.

    Raises:
        StripeError: The classified error for non-2xx responses
        MalformedResponseError: For bodies that are not the expected shape
    """
    body = _parse_body(response)
    try:
        return decode(body, shape)
    except MalformedResponseError as e:
        _attach_response(e, response, body)
        logger.error(f"Could not decode {shape.__name__}: {e.message} (Request-Id: {e.request_id or 'N/A'})")
        raise


def decode_list_response(response: httpx.Response, item_shape: type[T]) -> ListObject[T]:
    """Decode a list endpoint response into a :class:`ListObject`."""
    body = _parse_body(response)
    try:
        return decode_list(body, item_shape)
    except MalformedResponseError as e:
        _attach_response(e, response, body)
        logger.error(f"Could not decode list of {item_shape.__name__}: {e.message}")
        raise
