"""
Credential sources for request signing

A credential source hands the client a key identifier and a PEM encoded
private key whenever a request has to be signed. Two sources exist:

- ``StaticCredentialSource`` keeps credentials set once through
  ``WalletClient.set_credentials`` for the lifetime of the client.
- ``DynamicCredentialSource`` calls a caller-supplied loader for every request,
  so keys can be fetched from a secret store or rotated out of band. Credentials
  produced this way are cleared by the client right after signing.
"""

import os
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from .exceptions import CredentialsError, WalletSDKError

KEY_ID_ENV = "HALOGEN_WALLET_KEY_ID"
PRIVATE_KEY_PEM_ENV = "HALOGEN_WALLET_PRIVATE_KEY_PEM"


@dataclass
class Credentials:
    """
    Key identifier and private key used to sign one or more requests.

    Attributes:
        key_id: Key identifier issued by the Wallet service
        private_key_pem: PEM encoded EC (P-256) or RSA private key
    """
    key_id: str
    private_key_pem: bytes

    def __post_init__(self):
        if isinstance(self.private_key_pem, str):
            self.private_key_pem = self.private_key_pem.encode('utf-8')

        if not isinstance(self.private_key_pem, bytes):
            raise CredentialsError("Private key must be PEM bytes", "INVALID_CREDENTIALS")

    def clear(self) -> None:
        """
        Drop references to the key material (best effort).

        Python bytes are immutable and may be copied by the interpreter, so
        this only guarantees that this object no longer keeps the key alive.
        """
        self.private_key_pem = b''
        self.key_id = ''

    def __repr__(self) -> str:
        return f"Credentials(key_id='{self.key_id}', private_key_pem=<redacted>)"


CredentialsLoader = Callable[[], Union[Credentials, Tuple[str, Union[bytes, str]]]]


class CredentialSource:
    """Supplies credentials on demand."""

    # Whether credentials returned by ``get_credentials`` are owned by the
    # caller of the source and must be cleared after use
    ephemeral: bool = False

    def get_credentials(self) -> Credentials:  # pragma: no cover - interface
        raise NotImplementedError


class StaticCredentialSource(CredentialSource):
    """Holds credentials set once and returns them for every request."""

    def __init__(self, credentials: Optional[Credentials] = None):
        self._credentials = credentials

    def set_credentials(self, credentials: Credentials) -> None:
        self._credentials = credentials

    def get_credentials(self) -> Credentials:
        if self._credentials is None:
            raise CredentialsError(
                "credentials are not set. You may either use set_credentials or "
                "provide credentials_loader upon client initialization.",
                "NO_CREDENTIALS"
            )
        return self._credentials


class DynamicCredentialSource(CredentialSource):
    """Invokes a loader function to fetch fresh credentials for every request."""

    ephemeral = True

    def __init__(self, loader: CredentialsLoader):
        if not callable(loader):
            raise CredentialsError("credentials_loader must be callable", "INVALID_CREDENTIALS")
        self.loader = loader

    def get_credentials(self) -> Credentials:
        try:
            result = self.loader()
        except WalletSDKError:
            raise
        except Exception as e:
            raise CredentialsError(
                f"credentials loader failed: {e}",
                "CREDENTIALS_LOADER_FAILED",
                {'original_error': type(e).__name__}
            ) from e

        if isinstance(result, Credentials):
            # the returned copy belongs to the client, which clears it after signing
            return Credentials(key_id=result.key_id, private_key_pem=result.private_key_pem)

        if isinstance(result, tuple) and len(result) == 2:
            key_id, private_key_pem = result
            return Credentials(key_id=key_id, private_key_pem=private_key_pem)

        raise CredentialsError(
            "credentials loader must return Credentials or a (key_id, private_key_pem) tuple",
            "INVALID_CREDENTIALS"
        )


def file_credentials_loader(key_id: str, path: Union[str, os.PathLike]) -> CredentialsLoader:
    """
    Build a loader that re-reads a PEM file for every request.

    Args:
        key_id: Key identifier issued by the Wallet service
        path: Path of the PEM encoded private key

    Returns:
        Callable suitable for ``ClientOptions.credentials_loader``
    """
    def load() -> Credentials:
        try:
            with open(path, 'rb') as f:
                private_key_pem = f.read()
        except OSError as e:
            raise CredentialsError(
                f"Failed to read private key from {path}: {e}",
                "CREDENTIALS_LOADER_FAILED"
            ) from e
        return Credentials(key_id=key_id, private_key_pem=private_key_pem)

    return load


def env_credentials_loader(key_id_var: str = KEY_ID_ENV,
                           private_key_var: str = PRIVATE_KEY_PEM_ENV) -> CredentialsLoader:
    """Build a loader that reads credentials from environment variables on every call."""
    def load() -> Credentials:
        key_id = os.getenv(key_id_var)
        private_key_pem = os.getenv(private_key_var)
        if not key_id or not private_key_pem:
            raise CredentialsError(
                f"Environment variables {key_id_var} and {private_key_var} must both be set",
                "NO_CREDENTIALS"
            )
        return Credentials(key_id=key_id, private_key_pem=private_key_pem)

    return load
