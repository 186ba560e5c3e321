"""
Type definitions for request token signing

This module provides the claim set carried by every bearer token and the
signing key variants the signer dispatches on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Union

from cryptography.hazmat.primitives.asymmetric import ec, rsa

# Subject claim identifying this SDK to the Wallet service
CLAIM_SUBJECT = "wallet"

# Value of the "typ" header of every token
TOKEN_TYPE = "JWT"

# Lifetime of a request token
TOKEN_TTL_SECONDS = 3600


class SignatureAlgorithm(str, Enum):
    """Signature algorithm types"""
    ES256 = "ES256"
    RS256 = "RS256"


class Route(str, Enum):
    """Routes of the Wallet API"""
    QUERY = "/query"
    COMMAND = "/command"


@dataclass(frozen=True)
class ClaimSet:
    """
    Claims bound into a single request token

    Attributes:
        kid: Key identifier the token is signed with
        sub: Fixed subject identifying the calling application
        iat: Issued-at Unix timestamp
        exp: Expiry Unix timestamp
        nonce: Random hex value unique to the request
        body_hash: Hex SHA-256 of the exact transmitted request body
        uri: Route being called
    """
    kid: str
    sub: str
    iat: int
    exp: int
    nonce: str
    body_hash: str
    uri: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kid': self.kid,
            'sub': self.sub,
            'iat': self.iat,
            'exp': self.exp,
            'nonce': self.nonce,
            'bodyHash': self.body_hash,
            'uri': self.uri,
        }


@dataclass(frozen=True)
class ECSigningKey:
    """EC P-256 private key, signs with ES256"""
    algorithm: ClassVar[SignatureAlgorithm] = SignatureAlgorithm.ES256
    key: ec.EllipticCurvePrivateKey


@dataclass(frozen=True)
class RSASigningKey:
    """RSA private key, signs with RS256"""
    algorithm: ClassVar[SignatureAlgorithm] = SignatureAlgorithm.RS256
    key: rsa.RSAPrivateKey


SigningKey = Union[ECSigningKey, RSASigningKey]


class SigningErrorCodes:
    """Standard error codes for signing operations"""

    INVALID_KEY_ID = "INVALID_KEY_ID"
    INVALID_PRIVATE_KEY = "INVALID_PRIVATE_KEY"
    UNSUPPORTED_KEY_TYPE = "UNSUPPORTED_KEY_TYPE"
    UNSUPPORTED_KEY_SIZE = "UNSUPPORTED_KEY_SIZE"
    SIGNING_FAILED = "SIGNING_FAILED"
    CRYPTO_ERROR = "CRYPTO_ERROR"
