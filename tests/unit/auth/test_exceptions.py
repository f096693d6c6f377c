"""Tests for credential lookup errors."""

import pytest

from stripe_client_core.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from stripe_client_core.errors import ConfigurationError, ErrorKind, StripeError


@pytest.mark.parametrize("error_class", [CredentialError, CredentialNotFoundError, CredentialFileError])
def test_surfaces_as_configuration_error(error_class):
    error = error_class("STRIPE_API_KEY is not set")

    assert isinstance(error, ConfigurationError)
    assert isinstance(error, StripeError)
    assert error.kind is ErrorKind.CONFIGURATION
    assert error.message == "STRIPE_API_KEY is not set"
    assert str(error) == "STRIPE_API_KEY is not set"


def test_not_found_records_env_var():
    error = CredentialNotFoundError("No API key", env_var_name="STRIPE_API_KEY")

    assert error.env_var_name == "STRIPE_API_KEY"


def test_not_found_without_env_var():
    assert CredentialNotFoundError("No API key").env_var_name is None


def test_file_error_caught_as_credential_error():
    with pytest.raises(CredentialError, match="unreadable"):
        raise CredentialFileError("Key file unreadable")
