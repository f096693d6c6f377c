"""Shapes shared by several resources, and targets of expandable fields.

Only the fields the checkout and portal resources need are declared; the
decoder ignores the rest.
"""

from dataclasses import dataclass
from typing import Any

from stripe_client_core.stripe_object import APIResource, StripeObject, expandable, list_of, nested, scalar


@dataclass(frozen=True)
class Address(StripeObject):
    city: str | None = scalar()
    country: str | None = scalar()
    line1: str | None = scalar()
    line2: str | None = scalar()
    postal_code: str | None = scalar()
    state: str | None = scalar()


@dataclass(frozen=True)
class Shipping(StripeObject):
    address: Address | None = nested(Address)
    name: str | None = scalar()


@dataclass(frozen=True)
class Customer(APIResource):
    OBJECT_NAME = "customer"

    address: Address | None = nested(Address)
    created: int = scalar()
    email: str | None = scalar()
    livemode: bool = scalar()
    metadata: dict[str, str] = scalar()
    name: str | None = scalar()
    phone: str | None = scalar()


@dataclass(frozen=True)
class PaymentIntent(APIResource):
    OBJECT_NAME = "payment_intent"

    amount: int = scalar()
    currency: str = scalar()
    customer: "str | Customer | None" = expandable(Customer)
    livemode: bool = scalar()
    metadata: dict[str, str] = scalar()
    payment_method_types: list[str] = list_of()
    status: str = scalar()


@dataclass(frozen=True)
class SetupIntent(APIResource):
    OBJECT_NAME = "setup_intent"

    customer: "str | Customer | None" = expandable(Customer)
    livemode: bool = scalar()
    payment_method_types: list[str] = list_of()
    status: str = scalar()
    usage: str = scalar()


@dataclass(frozen=True)
class Subscription(APIResource):
    OBJECT_NAME = "subscription"

    cancel_at_period_end: bool = scalar()
    current_period_end: int = scalar()
    current_period_start: int = scalar()
    customer: "str | Customer" = expandable(Customer)
    livemode: bool = scalar()
    metadata: dict[str, str] = scalar()
    status: str = scalar()


@dataclass(frozen=True)
class Price(APIResource):
    OBJECT_NAME = "price"

    active: bool = scalar()
    currency: str = scalar()
    product: Any = scalar()
    recurring: dict[str, Any] | None = scalar()
    type: str = scalar()
    unit_amount: int | None = scalar()
