"""Checkout sessions and their line items.

Stripe API reference: https://stripe.com/docs/api/checkout/sessions
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from stripe_client_core.pagination import ListCursor
from stripe_client_core.resources.common import (
    Customer,
    PaymentIntent,
    Price,
    SetupIntent,
    Shipping,
    Subscription,
)
from stripe_client_core.stripe_object import (
    APIResource,
    ListObject,
    StripeObject,
    expandable,
    list_of,
    nested,
    scalar,
)

if TYPE_CHECKING:
    from stripe_client_core.client import Options, StripeClient


@dataclass(frozen=True)
class LineItem(APIResource):
    OBJECT_NAME = "item"

    amount_subtotal: int = scalar()
    amount_total: int = scalar()
    currency: str = scalar()
    description: str = scalar()
    price: "str | Price | None" = expandable(Price)
    quantity: int | None = scalar()


@dataclass(frozen=True)
class DisplayItem(StripeObject):
    amount: int = scalar()
    currency: str = scalar()
    custom: dict[str, Any] = scalar()
    quantity: int = scalar()
    type: str = scalar()


@dataclass(frozen=True)
class ShippingAddressCollection(StripeObject):
    allowed_countries: list[str] = list_of()


@dataclass(frozen=True)
class TaxIdCollection(StripeObject):
    enabled: bool = scalar()


@dataclass(frozen=True)
class Session(APIResource):
    OBJECT_NAME = "checkout.session"

    allow_promotion_codes: bool | None = scalar()
    amount_subtotal: int | None = scalar()
    amount_total: int | None = scalar()
    billing_address_collection: str | None = scalar()
    cancel_url: str = scalar()
    client_reference_id: str | None = scalar()
    currency: str | None = scalar()
    customer: "str | Customer | None" = expandable(Customer)
    customer_email: str | None = scalar()
    display_items: list[DisplayItem] = list_of(DisplayItem)
    line_items: "ListObject[LineItem]" = list_of(LineItem)
    livemode: bool = scalar()
    locale: str | None = scalar()
    metadata: dict[str, str] = scalar()
    mode: str = scalar()
    payment_intent: "str | PaymentIntent | None" = expandable(PaymentIntent)
    payment_method_types: list[str] = list_of()
    payment_status: str = scalar()
    setup_intent: "str | SetupIntent | None" = expandable(SetupIntent)
    shipping: Shipping | None = nested(Shipping)
    shipping_address_collection: ShippingAddressCollection | None = nested(ShippingAddressCollection)
    status: str | None = scalar()
    submit_type: str | None = scalar()
    subscription: "str | Subscription | None" = expandable(Subscription)
    success_url: str = scalar()
    tax_id_collection: TaxIdCollection | None = nested(TaxIdCollection)
    url: str | None = scalar()


class SessionService:
    """Create, retrieve and list checkout sessions, and list their line items."""

    ENDPOINT = "checkout/sessions"

    def __init__(self, client: "StripeClient"):
        self._client = client

    async def create(self, params: Mapping[str, Any], options: "Options" = None) -> Session:
        return await self._client.request("POST", self.ENDPOINT, Session, params, options)

    async def retrieve(self, id: "str | Session", options: "Options" = None) -> Session:
        return await self._client.request(
            "GET", self.ENDPOINT + "/{id}", Session, options=options, path_params={"id": id}
        )

    def list(self, params: Mapping[str, Any] | None = None, options: "Options" = None) -> ListCursor[Session]:
        return self._client.list(self.ENDPOINT, Session, params, options)

    def list_line_items(
        self,
        id: "str | Session",
        params: Mapping[str, Any] | None = None,
        options: "Options" = None,
    ) -> ListCursor[LineItem]:
        return self._client.list(
            self.ENDPOINT + "/{id}/line_items", LineItem, params, options, path_params={"id": id}
        )
