"""Request descriptors and the fluent builder that produces them.

Example:
    ```python
    descriptor = (
        new_request(options)
        .put_endpoint("billing_portal/configurations/{id}", id=config_id)
        .put_method("PUT")
        .put_params({"active": False})
        .build()
    )
    ```

The builder performs no I/O; :func:`stripe_client_core.dispatch.dispatch`
sends the descriptor.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from urllib.parse import quote

from stripe_client_core.encoding import encode_params
from stripe_client_core.errors.exceptions import InvalidParameterError
from stripe_client_core.options import EffectiveOptions
from stripe_client_core.stripe_object import StripeObject

logger = logging.getLogger(__name__)

HTTP_METHODS: frozenset[str] = frozenset(["GET", "POST", "PUT", "DELETE"])

# Methods whose params travel in the query string; all others send a form body
QUERY_METHODS: frozenset[str] = frozenset(["GET"])


def resource_id(value: Any, *, param: str = "id") -> str:
    """Resolve an identifier from a bare id string or a decoded resource.

    Raises:
        InvalidParameterError: If the id is empty, or the value has no id
    """
    if isinstance(value, str):
        if not value:
            raise InvalidParameterError(f"Identifier '{param}' must not be empty", param=param)
        return value

    if isinstance(value, StripeObject):
        identifier = getattr(value, "id", None)
        if isinstance(identifier, str) and identifier:
            return identifier
        raise InvalidParameterError(
            f"{type(value).__name__} has no '{param}' populated and cannot be used as an identifier",
            param=param,
        )

    raise InvalidParameterError(
        f"Identifier '{param}' must be a string or a resource, got {type(value).__name__}",
        param=param,
    )


def format_endpoint(template: str, path_params: Mapping[str, Any] | None = None) -> str:
    """Interpolate URL-escaped identifiers into an endpoint template.

    Raises:
        InvalidParameterError: On an empty endpoint, an unresolvable id, or a
            placeholder with no value
    """
    if not template:
        raise InvalidParameterError("Endpoint must not be empty")

    escaped = {
        name: quote(resource_id(value, param=name), safe="")
        for name, value in (path_params or {}).items()
    }
    try:
        return template.format(**escaped)
    except KeyError as e:
        raise InvalidParameterError(f"No value for {e} in endpoint {template!r}", param=str(e.args[0])) from None
    except (IndexError, ValueError) as e:
        # Positional "{}" or unbalanced braces
        raise InvalidParameterError(f"Malformed endpoint template {template!r}: {e}") from None


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to send one logical call."""

    method: str
    endpoint: str
    options: EffectiveOptions
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def encoded_params(self) -> list[tuple[str, str]]:
        return encode_params(self.params)

    @property
    def uses_query_string(self) -> bool:
        return self.method in QUERY_METHODS

    @property
    def url(self) -> str:
        return f"{self.options.api_base.rstrip('/')}/{self.endpoint.lstrip('/')}"


class RequestBuilder:
    """Accumulates endpoint, method, params and headers into a descriptor."""

    def __init__(self, options: EffectiveOptions):
        self._options = options
        self._endpoint: str | None = None
        self._method: str | None = None
        self._params: dict[str, Any] = {}
        self._headers: dict[str, str] = {}

    def put_endpoint(self, endpoint: str, **path_params: Any) -> "RequestBuilder":
        self._endpoint = format_endpoint(endpoint, path_params)
        return self

    def put_method(self, method: str) -> "RequestBuilder":
        if self._method is not None:
            raise InvalidParameterError(f"HTTP method already set to {self._method}")
        method = method.upper()
        if method not in HTTP_METHODS:
            raise InvalidParameterError(f"Unsupported HTTP method: {method}")
        self._method = method
        return self

    def put_params(self, params: Mapping[str, Any] | None) -> "RequestBuilder":
        if params is None:
            return self
        if not isinstance(params, Mapping):
            raise InvalidParameterError(f"Params must be a mapping, got {type(params).__name__}")
        self._params.update(params)
        return self

    def put_param(self, key: str, value: Any) -> "RequestBuilder":
        self._params[key] = value
        return self

    def put_header(self, name: str, value: str) -> "RequestBuilder":
        self._headers[name] = value
        return self

    def build(self) -> RequestDescriptor:
        if not self._endpoint:
            raise InvalidParameterError("Request has no endpoint")
        if self._method is None:
            raise InvalidParameterError("Request has no HTTP method")

        params = dict(self._params)
        if self._options.expand:
            existing = params.get("expand") or []
            expand = [existing] if isinstance(existing, str) else list(existing)
            expand.extend(path for path in self._options.expand if path not in expand)
            params["expand"] = expand

        return RequestDescriptor(
            method=self._method,
            endpoint=self._endpoint,
            options=self._options,
            params=MappingProxyType(params),
            headers=MappingProxyType(dict(self._headers)),
        )


def new_request(options: EffectiveOptions) -> RequestBuilder:
    return RequestBuilder(options)
