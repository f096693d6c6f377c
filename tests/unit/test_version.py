"""Test basic package functionality."""

import stripe_client_core
from stripe_client_core.dispatch import USER_AGENT


def test_version():
    """Test that package version is defined."""
    assert hasattr(stripe_client_core, "__version__")
    assert stripe_client_core.__version__ == "0.1.0"


def test_user_agent_carries_version():
    assert USER_AGENT == f"stripe-client-core/{stripe_client_core.__version__}"
