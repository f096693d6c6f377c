"""Pytest configuration and shared fixtures for stripe-client-core tests."""

from dataclasses import replace

import httpx
import pytest

from stripe_client_core import ClientConfig, RetryPolicy, StripeClient


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear settings-related environment variables before each test.

    This prevents a developer's real STRIPE_* settings from leaking into tests.
    """
    import os

    test_prefixes = ("TEST_", "STRIPE_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def no_delay_policy():
    """Retry policy that never waits between attempts."""
    return RetryPolicy(initial_delay=0.0, max_delay=0.0, jitter=0.0)


@pytest.fixture
def config():
    return ClientConfig(api_key="sk_test_123", max_network_retries=2)


@pytest.fixture
def make_client(config, no_delay_policy):
    """Factory for a client whose requests are served by ``handler``.

    Keyword arguments override fields of the default ClientConfig.
    """

    def _make(handler, **overrides) -> StripeClient:
        client_config = replace(config, **overrides) if overrides else config
        return StripeClient(
            client_config,
            transport=httpx.MockTransport(handler),
            retry_policy=no_delay_policy,
        )

    return _make
