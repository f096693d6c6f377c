"""Credential resolution for the API key and client settings.

Example:
    ```python
    from stripe_client_core.auth import CredentialResolver

    resolver = CredentialResolver()
    api_key = resolver.resolve(env_var_name="STRIPE_API_KEY", required=True)
    ```
"""

from stripe_client_core.auth.credentials import CredentialResolver
from stripe_client_core.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)

__all__ = [
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
]
