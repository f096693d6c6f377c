"""Resource shapes and their call sites."""

from stripe_client_core.resources.billing_portal import Configuration, ConfigurationService
from stripe_client_core.resources.checkout import LineItem, Session, SessionService
from stripe_client_core.resources.common import Customer, PaymentIntent, Price, SetupIntent, Subscription

__all__ = [
    "Configuration",
    "ConfigurationService",
    "Customer",
    "LineItem",
    "PaymentIntent",
    "Price",
    "Session",
    "SessionService",
    "SetupIntent",
    "Subscription",
]
