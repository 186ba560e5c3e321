"""
Wallet Python SDK
Authenticated client transport for the Halogen Wallet API
"""

from .version import __version__
from .config import (
    ClientOptions,
    DEFAULT_ENDPOINT,
    DEFAULT_MAX_READ_RETRY,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_TIMEOUT,
)
from .credentials import (
    Credentials,
    CredentialSource,
    StaticCredentialSource,
    DynamicCredentialSource,
    file_credentials_loader,
    env_credentials_loader,
)
from .error_codes import ErrorCodes
from .exceptions import (
    WalletSDKError,
    ValidationError,
    CredentialsError,
    SigningError,
    KeyFormatError,
    TransportError,
    RequestCancelledError,
    ResponseDecodeError,
    APIError,
)
from .http_client import (
    WalletClient,
    OperationKind,
    RequestContext,
    RetryState,
    classify_error,
    create_client,
    encode_envelope,
    parse_retry_after,
)
from .signing import (
    ClaimSet,
    SignatureAlgorithm,
    build_claims,
    parse_signing_key,
    sign_claims,
)

__all__ = [
    '__version__',

    # Configuration
    'ClientOptions',
    'DEFAULT_ENDPOINT',
    'DEFAULT_MAX_READ_RETRY',
    'DEFAULT_RETRY_INTERVAL',
    'DEFAULT_TIMEOUT',

    # Credentials
    'Credentials',
    'CredentialSource',
    'StaticCredentialSource',
    'DynamicCredentialSource',
    'file_credentials_loader',
    'env_credentials_loader',

    # Errors
    'ErrorCodes',
    'WalletSDKError',
    'ValidationError',
    'CredentialsError',
    'SigningError',
    'KeyFormatError',
    'TransportError',
    'RequestCancelledError',
    'ResponseDecodeError',
    'APIError',

    # Transport
    'WalletClient',
    'OperationKind',
    'RequestContext',
    'RetryState',
    'classify_error',
    'create_client',
    'encode_envelope',
    'parse_retry_after',

    # Signing
    'ClaimSet',
    'SignatureAlgorithm',
    'build_claims',
    'parse_signing_key',
    'sign_claims',
]
