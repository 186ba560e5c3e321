"""
Compact JWS signing of request tokens

The signing algorithm is chosen by the private key itself: an EC P-256 key
signs with ES256, an RSA key with RS256. Keys are parsed with the
cryptography package and the compact token is produced with PyJWT.
"""

from typing import Union

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from ..exceptions import KeyFormatError, SigningError
from .types import (
    ClaimSet,
    ECSigningKey,
    RSASigningKey,
    SigningKey,
    SigningErrorCodes,
    TOKEN_TYPE,
)

MIN_RSA_KEY_SIZE = 2048


def parse_signing_key(private_key_pem: Union[str, bytes]) -> SigningKey:
    """
    Load a PEM private key into the signing key variant matching its type.

    Args:
        private_key_pem: Unencrypted PEM (PKCS#8, SEC1 or PKCS#1)

    Returns:
        ECSigningKey or RSASigningKey

    Raises:
        KeyFormatError: If the key is malformed, encrypted or of an unsupported
            type, curve or size
    """
    if isinstance(private_key_pem, str):
        private_key_pem = private_key_pem.encode('utf-8')

    if not private_key_pem:
        raise KeyFormatError("Private key is empty", SigningErrorCodes.INVALID_PRIVATE_KEY)

    try:
        key = serialization.load_pem_private_key(private_key_pem, password=None)
    except (ValueError, TypeError) as e:
        raise KeyFormatError(
            f"Failed to parse private key: {e}",
            SigningErrorCodes.INVALID_PRIVATE_KEY
        ) from e
    except UnsupportedAlgorithm as e:
        raise KeyFormatError(
            f"Unsupported private key: {e}",
            SigningErrorCodes.UNSUPPORTED_KEY_TYPE
        ) from e

    if isinstance(key, ec.EllipticCurvePrivateKey):
        if not isinstance(key.curve, ec.SECP256R1):
            raise KeyFormatError(
                f"Unsupported elliptic curve {key.curve.name}, expected P-256",
                SigningErrorCodes.UNSUPPORTED_KEY_TYPE,
                {'curve': key.curve.name}
            )
        return ECSigningKey(key=key)

    if isinstance(key, rsa.RSAPrivateKey):
        if key.key_size < MIN_RSA_KEY_SIZE:
            raise KeyFormatError(
                f"RSA key must be at least {MIN_RSA_KEY_SIZE} bits, got {key.key_size}",
                SigningErrorCodes.UNSUPPORTED_KEY_SIZE,
                {'key_size': key.key_size}
            )
        return RSASigningKey(key=key)

    raise KeyFormatError(
        f"Unsupported private key type {type(key).__name__}, expected EC P-256 or RSA",
        SigningErrorCodes.UNSUPPORTED_KEY_TYPE
    )


def sign_claims(claims: ClaimSet, private_key_pem: Union[str, bytes]) -> str:
    """
    Sign ``claims`` and return the compact token ``header.claims.signature``.

    Args:
        claims: Claim set of the request
        private_key_pem: PEM private key; selects ES256 or RS256

    Returns:
        str: Compact JWS suitable for a Bearer Authorization header

    Raises:
        KeyFormatError: If the key cannot be used
        SigningError: If the signing operation fails
    """
    signing_key = parse_signing_key(private_key_pem)

    try:
        token = jwt.encode(
            claims.to_dict(),
            signing_key.key,
            algorithm=signing_key.algorithm.value,
            headers={'typ': TOKEN_TYPE},
        )
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        raise SigningError(
            f"Failed to sign request token: {e}",
            SigningErrorCodes.SIGNING_FAILED,
            {'algorithm': signing_key.algorithm.value}
        ) from e

    # PyJWT < 2 returned bytes
    if isinstance(token, bytes):
        token = token.decode('ascii')

    if token.count('.') != 2 or token.endswith('.'):
        raise SigningError("Signer produced an incomplete token", SigningErrorCodes.SIGNING_FAILED)

    return token
