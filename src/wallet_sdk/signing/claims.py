"""
Claim set construction for request tokens
"""

from typing import Optional, Union

from ..exceptions import SigningError
from .types import CLAIM_SUBJECT, ClaimSet, Route, SigningErrorCodes
from .utils import calculate_body_hash, generate_nonce, generate_timestamp


def build_claims(
    key_id: str,
    route: Union[str, Route],
    body: Union[str, bytes],
    ttl: int,
    now: Optional[int] = None
) -> ClaimSet:
    """
    Build the claims of one request token.

    Args:
        key_id: Key identifier the token will be signed with
        route: Route being called, e.g. ``/query``
        body: Exact request body bytes that will be transmitted
        ttl: Token lifetime in seconds
        now: Issued-at timestamp, defaults to the current time

    Returns:
        ClaimSet: Fresh claims with a new nonce

    Raises:
        SigningError: If the key id is empty or the random source fails
    """
    if not key_id:
        raise SigningError("Key ID cannot be empty", SigningErrorCodes.INVALID_KEY_ID)

    if ttl <= 0:
        raise SigningError("Token TTL must be positive", SigningErrorCodes.SIGNING_FAILED)

    issued_at = generate_timestamp() if now is None else now

    return ClaimSet(
        kid=key_id,
        sub=CLAIM_SUBJECT,
        iat=issued_at,
        exp=issued_at + ttl,
        nonce=generate_nonce(),
        body_hash=calculate_body_hash(body),
        uri=route.value if isinstance(route, Route) else route,
    )
