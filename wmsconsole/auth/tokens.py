"""JWT helpers for tokens issued by the WMS backend."""

from datetime import datetime, timezone
from typing import Optional

from jose import JWTError, jwt


def token_expiry(token: Optional[str]) -> Optional[datetime]:
    """
    Read the `exp` claim without verifying the signature.

    The console never holds the backend's signing key; the backend still
    verifies every request. Opaque or unparseable tokens return None.
    """
    if not token:
        return None
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)


def token_is_expired(token: Optional[str], now: Optional[datetime] = None) -> bool:
    expiry = token_expiry(token)
    if expiry is None:
        return False
    return expiry <= (now or datetime.now(timezone.utc))
