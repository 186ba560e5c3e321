"""
Configuration module for Wallet Python SDK
"""

from .client_config import (
    ClientOptions,
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    DEFAULT_MAX_READ_RETRY,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_USER_AGENT,
)

__all__ = [
    'ClientOptions',
    'DEFAULT_ENDPOINT',
    'DEFAULT_TIMEOUT',
    'DEFAULT_MAX_READ_RETRY',
    'DEFAULT_RETRY_INTERVAL',
    'DEFAULT_USER_AGENT',
]
