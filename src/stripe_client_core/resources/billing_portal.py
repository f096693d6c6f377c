"""Customer portal configurations.

Stripe API reference: https://stripe.com/docs/api/customer_portal/configuration
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from stripe_client_core.pagination import ListCursor
from stripe_client_core.stripe_object import APIResource, StripeObject, list_of, nested, scalar

if TYPE_CHECKING:
    from stripe_client_core.client import Options, StripeClient


@dataclass(frozen=True)
class BusinessProfile(StripeObject):
    headline: str | None = scalar()
    privacy_policy_url: str | None = scalar()
    terms_of_service_url: str | None = scalar()


@dataclass(frozen=True)
class EnabledFeature(StripeObject):
    enabled: bool = scalar()


@dataclass(frozen=True)
class CustomerUpdate(StripeObject):
    allowed_updates: list[str] = list_of()  # email, address, shipping, phone, tax_id
    enabled: bool = scalar()


@dataclass(frozen=True)
class SubscriptionCancel(StripeObject):
    enabled: bool = scalar()
    mode: str = scalar()  # immediately | at_period_end
    proration_behavior: str = scalar()


@dataclass(frozen=True)
class PortalProduct(StripeObject):
    prices: list[str] = list_of()
    product: str = scalar()


@dataclass(frozen=True)
class SubscriptionUpdate(StripeObject):
    default_allowed_updates: list[str] = list_of()  # price, quantity, promotion_code
    enabled: bool = scalar()
    products: list[PortalProduct] | None = list_of(PortalProduct)
    proration_behavior: str = scalar()


@dataclass(frozen=True)
class Features(StripeObject):
    customer_update: CustomerUpdate = nested(CustomerUpdate)
    invoice_history: EnabledFeature = nested(EnabledFeature)
    payment_method_update: EnabledFeature = nested(EnabledFeature)
    subscription_cancel: SubscriptionCancel = nested(SubscriptionCancel)
    subscription_pause: EnabledFeature = nested(EnabledFeature)
    subscription_update: SubscriptionUpdate = nested(SubscriptionUpdate)


@dataclass(frozen=True)
class Configuration(APIResource):
    OBJECT_NAME = "billing_portal.configuration"

    active: bool = scalar()
    application: str | None = scalar()
    business_profile: BusinessProfile = nested(BusinessProfile)
    created: int = scalar()
    default_return_url: str | None = scalar()
    features: Features = nested(Features)
    is_default: bool = scalar()
    livemode: bool = scalar()
    updated: int = scalar()


class ConfigurationService:
    """Create, retrieve, update and list portal configurations."""

    ENDPOINT = "billing_portal/configurations"

    def __init__(self, client: "StripeClient"):
        self._client = client

    async def create(self, params: Mapping[str, Any], options: "Options" = None) -> Configuration:
        """Create a configuration; ``business_profile`` and ``features`` are required by the API."""
        return await self._client.request("POST", self.ENDPOINT, Configuration, params, options)

    async def retrieve(self, id: "str | Configuration", options: "Options" = None) -> Configuration:
        return await self._client.request(
            "GET", self.ENDPOINT + "/{id}", Configuration, options=options, path_params={"id": id}
        )

    async def update(
        self, id: "str | Configuration", params: Mapping[str, Any], options: "Options" = None
    ) -> Configuration:
        return await self._client.request(
            "PUT", self.ENDPOINT + "/{id}", Configuration, params, options, path_params={"id": id}
        )

    def list(
        self, params: Mapping[str, Any] | None = None, options: "Options" = None
    ) -> ListCursor[Configuration]:
        return self._client.list(self.ENDPOINT, Configuration, params, options)
