"""Declarative shapes for decoded API objects.

Shapes are frozen dataclasses whose fields are declared with one of four
helpers, which record the field kind the decoder acts on:

- :func:`scalar` - value passed through as parsed JSON
- :func:`nested` - JSON object decoded into another shape
- :func:`list_of` - JSON array (or embedded list envelope) of a shape
- :func:`expandable` - either a bare id string or an embedded object

Fields the API did not return hold :data:`NOT_PRESENT`, which is distinct
from an explicit JSON ``null`` (decoded as ``None``).

Example:
    ```python
    @dataclass(frozen=True)
    class Invoice(APIResource):
        OBJECT_NAME = "invoice"

        amount_due: int = scalar()
        customer: "str | Customer" = expandable(Customer)
        lines: "ListObject[InvoiceLine]" = list_of(InvoiceLine)
    ```
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

T = TypeVar("T")


class _NotPresent:
    """Marker for a declared field the response did not contain."""

    _instance: "_NotPresent | None" = None

    def __new__(cls) -> "_NotPresent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_PRESENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_NotPresent":
        return self

    def __deepcopy__(self, memo: dict) -> "_NotPresent":
        return self

    def __reduce__(self) -> str:
        return "NOT_PRESENT"


NOT_PRESENT: Any = _NotPresent()


class FieldKind(Enum):
    SCALAR = "scalar"
    NESTED = "nested"
    LIST = "list"
    EXPANDABLE = "expandable"


def scalar() -> Any:
    return field(default=NOT_PRESENT, metadata={"kind": FieldKind.SCALAR})


def nested(shape: type) -> Any:
    return field(default=NOT_PRESENT, metadata={"kind": FieldKind.NESTED, "shape": shape})


def list_of(shape: type | None = None) -> Any:
    """Declare a list field; ``shape=None`` keeps the items as parsed JSON."""
    return field(default=NOT_PRESENT, metadata={"kind": FieldKind.LIST, "shape": shape})


def expandable(shape: type) -> Any:
    return field(default=NOT_PRESENT, metadata={"kind": FieldKind.EXPANDABLE, "shape": shape})


def field_kind(f: Any) -> FieldKind:
    return f.metadata.get("kind", FieldKind.SCALAR)


def _to_plain(value: Any) -> Any:
    if isinstance(value, (StripeObject, ListObject)):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class StripeObject:
    """Base for every decoded shape, including nested sub-objects."""

    OBJECT_NAME: ClassVar[str | None] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the fields that were present in the response, recursively."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is NOT_PRESENT:
                continue
            result[f.name] = _to_plain(value)
        return result

    def is_present(self, name: str) -> bool:
        return getattr(self, name) is not NOT_PRESENT


@dataclass(frozen=True)
class APIResource(StripeObject):
    """A top-level resource with an identifier and an ``object`` marker."""

    id: str = scalar()
    object: str = scalar()


@dataclass(frozen=True)
class ListObject(Generic[T]):
    """One page of a list endpoint."""

    object: str = "list"
    data: list[T] = field(default_factory=list)
    has_more: bool = False
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "object": self.object,
            "data": [_to_plain(item) for item in self.data],
            "has_more": self.has_more,
            "url": self.url,
        }

    def __iter__(self):
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)
