"""Errors from looking up the API key and client settings.

These are configuration problems, so they subclass
:class:`~stripe_client_core.errors.ConfigurationError` and surface with
``ErrorKind.CONFIGURATION``.
"""

from stripe_client_core.errors.exceptions import ConfigurationError


class CredentialError(ConfigurationError):
    """A setting was found but is unusable, e.g. not an integer."""


class CredentialNotFoundError(CredentialError):
    """No source provided a required setting.

    Attributes:
        env_var_name: Environment variable that was consulted, if any.
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """The API key file is missing or unreadable."""
