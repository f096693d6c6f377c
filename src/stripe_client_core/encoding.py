"""Form encoding of nested parameters.

The API takes nested parameters in bracket notation, with array elements
indexed so their order survives::

    {"features": {"invoice_history": {"enabled": True}}}
        -> features[invoice_history][enabled]=true
    {"line_items": [{"price": "price_1", "quantity": 2}]}
        -> line_items[0][price]=price_1, line_items[0][quantity]=2
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from stripe_client_core.stripe_object import APIResource


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _flatten(pairs: list[tuple[str, str]], key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, APIResource):
        # A decoded resource passed as a parameter stands for its id
        pairs.append((key, value.id))
    elif isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _flatten(pairs, f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(pairs, f"{key}[{index}]", item)
    else:
        pairs.append((key, _encode_scalar(value)))


def encode_params(params: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Flatten nested parameters into ordered ``(key, value)`` pairs.

    ``None`` values are dropped; booleans become ``true``/``false``.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in (params or {}).items():
        _flatten(pairs, str(key), value)
    return pairs


def _split_key(key: str) -> list[str]:
    head, bracket, rest = key.partition("[")
    if not bracket:
        return [key]
    return [head] + rest.rstrip("]").split("][")


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    converted = {key: _listify(value) for key, value in node.items()}
    if converted and all(key.isdigit() for key in converted):
        indices = sorted(int(key) for key in converted)
        if indices == list(range(len(indices))):
            return [converted[str(index)] for index in indices]
    return converted


def decode_params(pairs: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Rebuild nested parameters from encoded pairs.

    Indexed keys become lists; values stay strings.
    """
    root: dict[str, Any] = {}
    for key, value in pairs:
        parts = _split_key(key)
        node = root
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value
    return {key: _listify(value) for key, value in root.items()}
