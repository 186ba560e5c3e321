"""
Wallet Python SDK - Request Signing Module

Builds the per-request claim set and signs it into a compact JWS bearer
token with ES256 (EC P-256 keys) or RS256 (RSA keys).
"""

from .types import (
    ClaimSet,
    ECSigningKey,
    RSASigningKey,
    SigningKey,
    SignatureAlgorithm,
    SigningErrorCodes,
    Route,
    CLAIM_SUBJECT,
    TOKEN_TYPE,
    TOKEN_TTL_SECONDS,
)

from .utils import (
    generate_nonce,
    generate_timestamp,
    calculate_body_hash,
    validate_nonce,
)

from .claims import build_claims

from .jwt_signer import (
    parse_signing_key,
    sign_claims,
    MIN_RSA_KEY_SIZE,
)

__all__ = [
    # Types
    'ClaimSet',
    'ECSigningKey',
    'RSASigningKey',
    'SigningKey',
    'SignatureAlgorithm',
    'SigningErrorCodes',
    'Route',
    'CLAIM_SUBJECT',
    'TOKEN_TYPE',
    'TOKEN_TTL_SECONDS',

    # Utilities
    'generate_nonce',
    'generate_timestamp',
    'calculate_body_hash',
    'validate_nonce',

    # Claims and signing
    'build_claims',
    'parse_signing_key',
    'sign_claims',
    'MIN_RSA_KEY_SIZE',
]
