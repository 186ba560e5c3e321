"""
Utility functions for request signing

Nonce generation, timestamp handling and body digest calculation.
"""

import re
import time
import hashlib
import secrets
from typing import Union

from ..exceptions import SigningError
from .types import SigningErrorCodes

NONCE_BYTES = 16

_HEX_PATTERN = re.compile(r'^[0-9a-f]+$')


def generate_nonce(num_bytes: int = NONCE_BYTES) -> str:
    """
    Generate a random hex nonce for replay protection.

    Returns:
        str: ``2 * num_bytes`` lowercase hex characters

    Raises:
        SigningError: If the system random source fails
    """
    try:
        return secrets.token_hex(num_bytes)
    except Exception as e:
        raise SigningError(
            f"Failed to generate nonce: {e}",
            SigningErrorCodes.CRYPTO_ERROR,
            {"original_error": str(e)}
        ) from e


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def calculate_body_hash(body: Union[str, bytes]) -> str:
    """Hex encoded SHA-256 digest of the request body."""
    if isinstance(body, str):
        body = body.encode('utf-8')
    return hashlib.sha256(body).hexdigest()


def validate_nonce(nonce: str) -> bool:
    """Check that ``nonce`` looks like a nonce produced by ``generate_nonce``."""
    if not isinstance(nonce, str) or len(nonce) < NONCE_BYTES * 2:
        return False
    return bool(_HEX_PATTERN.match(nonce))
