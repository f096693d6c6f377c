"""Client-wide defaults, per-call options and their resolution.

A :class:`ClientConfig` is built once at startup (usually with
:meth:`ClientConfig.from_env`) and never changes. Each call may pass
:class:`RequestOptions`; :func:`resolve_options` merges the two into the
:class:`EffectiveOptions` used for that call and its retries.

Precedence, highest first: per-call options, client config, built-in defaults.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from stripe_client_core.auth.credentials import CredentialResolver
from stripe_client_core.errors.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.stripe.com/v1"
DEFAULT_API_VERSION = "2020-08-27"
DEFAULT_MAX_NETWORK_RETRIES = 2
DEFAULT_TIMEOUT = 80.0


@dataclass(frozen=True)
class ClientConfig:
    """Process-wide defaults.

    Attributes:
        api_key: Secret API key. Not shown in repr.
        api_base: Base URL all endpoints are relative to.
        api_version: Value of the ``Stripe-Version`` header.
        stripe_account: Connected account id sent as ``Stripe-Account``.
        max_network_retries: Retries after the first attempt.
        timeout: Per-attempt timeout in seconds.
    """

    api_key: str | None = field(default=None, repr=False)
    api_base: str = DEFAULT_API_BASE
    api_version: str = DEFAULT_API_VERSION
    stripe_account: str | None = None
    max_network_retries: int = DEFAULT_MAX_NETWORK_RETRIES
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, resolver: CredentialResolver | None = None) -> "ClientConfig":
        """Build the config from ``STRIPE_*`` environment variables (and .env).

        The API key may come from the file named by ``STRIPE_API_KEY_FILE``
        when ``STRIPE_API_KEY`` is unset.

        Raises:
            ConfigurationError: If ``STRIPE_MAX_NETWORK_RETRIES`` is not a
                non-negative integer.
        """
        resolver = resolver or CredentialResolver()
        return cls(
            api_key=resolver.resolve_api_key(),
            api_base=resolver.resolve(
                env_var_name="STRIPE_API_BASE", default=DEFAULT_API_BASE, mask_in_logs=False
            ),
            api_version=resolver.resolve(
                env_var_name="STRIPE_API_VERSION", default=DEFAULT_API_VERSION, mask_in_logs=False
            ),
            stripe_account=resolver.resolve(env_var_name="STRIPE_ACCOUNT", mask_in_logs=False),
            max_network_retries=resolver.resolve_int(
                env_var_name="STRIPE_MAX_NETWORK_RETRIES", default=DEFAULT_MAX_NETWORK_RETRIES, minimum=0
            ),
        )


@dataclass(frozen=True)
class RequestOptions:
    """Options explicit to a single call. Unset fields fall back to the config."""

    api_key: str | None = field(default=None, repr=False)
    api_base: str | None = None
    api_version: str | None = None
    stripe_account: str | None = None
    idempotency_key: str | None = None
    max_network_retries: int | None = None
    expand: tuple[str, ...] = ()

    def __post_init__(self):
        expand = self.expand
        if expand is None:
            expand = ()
        if isinstance(expand, str) or not isinstance(expand, Sequence):
            raise ConfigurationError(f"expand must be a sequence of field paths, got {expand!r}")
        if not all(isinstance(path, str) and path for path in expand):
            raise ConfigurationError(f"expand entries must be non-empty strings, got {expand!r}")
        object.__setattr__(self, "expand", tuple(expand))


@dataclass(frozen=True)
class EffectiveOptions:
    """Fully resolved options for one call, shared by all of its retries."""

    api_key: str = field(repr=False)
    api_base: str
    api_version: str
    stripe_account: str | None = None
    idempotency_key: str | None = None
    max_network_retries: int = DEFAULT_MAX_NETWORK_RETRIES
    expand: tuple[str, ...] = ()
    timeout: float = DEFAULT_TIMEOUT


def _coerce(explicit: "RequestOptions | Mapping[str, Any] | None") -> RequestOptions:
    if explicit is None:
        return RequestOptions()
    if isinstance(explicit, RequestOptions):
        return explicit
    if isinstance(explicit, Mapping):
        try:
            return RequestOptions(**explicit)
        except TypeError as e:
            raise ConfigurationError(f"Unknown request option: {e}") from None
    raise ConfigurationError(f"Unsupported request options type: {type(explicit).__name__}")


def resolve_options(
    defaults: ClientConfig,
    explicit: RequestOptions | Mapping[str, Any] | None = None,
) -> EffectiveOptions:
    """Merge per-call options over the client defaults.

    Args:
        defaults: Client-wide configuration
        explicit: Per-call options, as RequestOptions or a plain mapping

    Returns:
        EffectiveOptions for this call

    Raises:
        ConfigurationError: If no API key is resolvable, or the retry count
            is negative
    """
    explicit = _coerce(explicit)

    api_key = explicit.api_key or defaults.api_key
    if not api_key:
        raise ConfigurationError(
            "No API key provided. Set STRIPE_API_KEY, pass api_key to ClientConfig, "
            "or pass api_key in the request options."
        )

    max_network_retries = (
        explicit.max_network_retries
        if explicit.max_network_retries is not None
        else defaults.max_network_retries
    )
    if max_network_retries < 0:
        raise ConfigurationError(f"max_network_retries must be >= 0, got {max_network_retries}")

    return EffectiveOptions(
        api_key=api_key,
        api_base=explicit.api_base or defaults.api_base or DEFAULT_API_BASE,
        api_version=explicit.api_version or defaults.api_version or DEFAULT_API_VERSION,
        stripe_account=explicit.stripe_account or defaults.stripe_account,
        idempotency_key=explicit.idempotency_key,
        max_network_retries=max_network_retries,
        expand=explicit.expand,
        timeout=defaults.timeout,
    )
