"""
Client configuration for the Wallet Python SDK

Options can be passed directly, or loaded from HALOGEN_WALLET_* environment
variables with ``ClientOptions.from_env``.
"""

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import requests

from ..credentials import CredentialsLoader
from ..exceptions import ValidationError
from ..version import __version__

DEFAULT_ENDPOINT = "https://external-api.wallet.halogen.my"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_READ_RETRY = 5
DEFAULT_RETRY_INTERVAL = 0.05
DEFAULT_USER_AGENT = f"wallet/{__version__} lang/python"

ENDPOINT_ENV = "HALOGEN_WALLET_ENDPOINT"
TIMEOUT_ENV = "HALOGEN_WALLET_TIMEOUT"
MAX_READ_RETRY_ENV = "HALOGEN_WALLET_MAX_READ_RETRY"
RETRY_INTERVAL_MS_ENV = "HALOGEN_WALLET_RETRY_INTERVAL_MS"
DEBUG_ENV = "HALOGEN_WALLET_DEBUG"

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass
class ClientOptions:
    """
    Configuration settings for ``WalletClient``

    Attributes:
        endpoint: Base URL of the Wallet API
        session: Optional requests.Session used to call the server. The client
            creates and owns one when not provided.
        timeout: Per-attempt HTTP timeout in seconds
        max_read_retry: Attempts made for a query answered with a server error
        retry_interval: Seconds to wait before retrying a query after a server error
        debug: Log requests, responses and diagnostic notices
        credentials_loader: Called for every request to retrieve credentials.
            Recommended over ``WalletClient.set_credentials``, which keeps
            credentials in memory along with the client instance. When set,
            static credentials are ignored.
        user_agent: User-Agent header value
    """
    endpoint: str = DEFAULT_ENDPOINT
    session: Optional[requests.Session] = None
    timeout: float = DEFAULT_TIMEOUT
    max_read_retry: int = DEFAULT_MAX_READ_RETRY
    retry_interval: float = DEFAULT_RETRY_INTERVAL
    debug: bool = False
    credentials_loader: Optional[CredentialsLoader] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        """Validate configuration and fill in defaults for unset values"""
        if not self.endpoint:
            raise ValidationError("Endpoint cannot be empty")

        self.endpoint = self.endpoint.rstrip('/')

        parsed = urlparse(self.endpoint)
        if not parsed.scheme or not parsed.netloc:
            raise ValidationError(f"Invalid endpoint URL format: {self.endpoint}")

        # force a timeout on every request
        if not self.timeout or self.timeout <= 0:
            self.timeout = DEFAULT_TIMEOUT

        if not self.max_read_retry or self.max_read_retry <= 0:
            self.max_read_retry = DEFAULT_MAX_READ_RETRY

        if not self.retry_interval or self.retry_interval <= 0:
            self.retry_interval = DEFAULT_RETRY_INTERVAL

        if self.credentials_loader is not None and not callable(self.credentials_loader):
            raise ValidationError("credentials_loader must be callable")

        if not self.user_agent:
            self.user_agent = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, **overrides) -> "ClientOptions":
        """
        Build options from HALOGEN_WALLET_* environment variables.

        Keyword arguments take precedence over the environment.

        Raises:
            ValidationError: If a numeric variable cannot be parsed
        """
        values = {
            'endpoint': os.getenv(ENDPOINT_ENV, DEFAULT_ENDPOINT),
            'timeout': _env_number(TIMEOUT_ENV, float, DEFAULT_TIMEOUT),
            'max_read_retry': _env_number(MAX_READ_RETRY_ENV, int, DEFAULT_MAX_READ_RETRY),
            'retry_interval': _env_number(RETRY_INTERVAL_MS_ENV, float, DEFAULT_RETRY_INTERVAL * 1000) / 1000,
            'debug': os.getenv(DEBUG_ENV, '').strip().lower() in _TRUTHY,
        }
        values.update(overrides)
        return cls(**values)


def _env_number(name: str, parse, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return parse(raw.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid value for {name}: {raw!r}") from e
