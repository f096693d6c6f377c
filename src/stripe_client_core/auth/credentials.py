"""Where the API key and client settings come from.

A setting is taken from the first of these that has it:

1. a value passed in code
2. the process environment
3. a ``.env`` file, merged into the environment once by python-dotenv
4. the built-in default

The API key may also be kept in a file named by ``STRIPE_API_KEY_FILE``
(a mounted secret, for instance). Secrets are masked in debug logs; only
the source they were read from is shown.
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from stripe_client_core.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)

logger = logging.getLogger(__name__)

API_KEY_ENV = "STRIPE_API_KEY"
API_KEY_FILE_ENV = "STRIPE_API_KEY_FILE"

_MASK = "***"


def _file_problem(path: Path, error: OSError) -> str:
    if isinstance(error, FileNotFoundError):
        return f"API key file not found: {path}"
    if isinstance(error, PermissionError):
        return f"No permission to read API key file: {path}"
    return f"Could not read API key file {path}: {error}"


class CredentialResolver:
    """Look up settings across code, environment, .env and defaults.

    Example:
        ```python
        resolver = CredentialResolver()
        api_key = resolver.resolve_api_key()
        retries = resolver.resolve_int(env_var_name="STRIPE_MAX_NETWORK_RETRIES", default=2, minimum=0)
        ```
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """
        Args:
            dotenv_path: Explicit .env location. When None, python-dotenv
                searches upward from the working directory.
            load_dotenv: False leaves the environment untouched.
        """
        self._dotenv_path = dotenv_path
        self._use_dotenv = load_dotenv
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()

        if self._use_dotenv:
            self._load_dotenv_once()

    def _load_dotenv_once(self) -> None:
        if self._dotenv_loaded:
            return
        with self._dotenv_lock:
            if self._dotenv_loaded:
                return
            try:
                found = load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug(f".env merged into environment: {found}")
            except OSError as e:
                logger.warning(f"Ignoring unreadable .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Return the first available value for a setting.

        Args:
            value: Value given in code; wins over everything else.
            env_var_name: Environment variable consulted next (.env included).
            default: Fallback when neither is set.
            required: Raise instead of returning None.
            mask_in_logs: False for settings safe to log, like the API base.

        Raises:
            CredentialNotFoundError: ``required`` and no source had a value.
        """
        if value is not None:
            found, source = value, "code"
        elif env_var_name and env_var_name in os.environ:
            found, source = os.environ[env_var_name], f"${env_var_name}"
        else:
            found, source = default, "default"

        if found is None:
            if required:
                where = f" (looked in ${env_var_name})" if env_var_name else ""
                raise CredentialNotFoundError(f"Required setting has no value{where}", env_var_name=env_var_name)
            return None

        logger.debug(f"Setting taken from {source}: {_MASK if mask_in_logs else found}")
        return found

    def resolve_int(
        self,
        *,
        value: int | None = None,
        env_var_name: str | None = None,
        default: int | None = None,
        minimum: int | None = None,
    ) -> int | None:
        """Integer variant of :meth:`resolve` for non-secret settings.

        Raises:
            CredentialError: The value is not an integer or is below ``minimum``.
        """
        name = env_var_name or "setting"
        raw = (
            str(value)
            if value is not None
            else self.resolve(
                env_var_name=env_var_name,
                default=None if default is None else str(default),
                mask_in_logs=False,
            )
        )
        if raw is None:
            return None

        try:
            number = int(raw)
        except ValueError:
            raise CredentialError(f"{name} must be an integer, got {raw!r}") from None
        if minimum is not None and number < minimum:
            raise CredentialError(f"{name} must be at least {minimum}, got {number}")
        return number

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a secret from a file given directly or through ``env_var_name``.

        ``~`` and ``$VAR`` in the path are expanded; surrounding whitespace in
        the file is stripped.

        Raises:
            CredentialFileError: ``required`` and the file could not be read.
        """
        if file_path is None and env_var_name:
            file_path = self.resolve(env_var_name=env_var_name, mask_in_logs=False) or None

        if file_path is None:
            if required:
                where = f" (${env_var_name} is not set)" if env_var_name else ""
                raise CredentialFileError(f"No API key file given{where}")
            return None

        path = Path(os.path.expanduser(os.path.expandvars(str(file_path))))
        try:
            secret = path.read_text().strip()
        except OSError as e:
            problem = _file_problem(path, e)
            if required:
                raise CredentialFileError(problem) from e
            if isinstance(e, FileNotFoundError):
                logger.debug(problem)
            else:
                logger.warning(problem)
            return None

        logger.debug(f"Setting taken from file {path}: {_MASK}")
        return secret

    def resolve_api_key(self, api_key: str | None = None) -> str | None:
        """API key from code, ``$STRIPE_API_KEY``, or the file in ``$STRIPE_API_KEY_FILE``.

        A missing key is not an error here; it is reported when a call is made.
        """
        resolved = self.resolve(value=api_key, env_var_name=API_KEY_ENV)
        if resolved:
            return resolved
        return self.resolve_from_file(env_var_name=API_KEY_FILE_ENV)
