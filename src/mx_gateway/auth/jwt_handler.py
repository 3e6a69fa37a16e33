"""JWT access token creation and verification.

The caller's account address travels in ``sub``; operators carry
``role = "admin"``. Tokens are issued by whichever identity service shares
JWT_SECRET with this one; ``create_access_token`` exists for that service's
tooling and for tests.

MVP NOTE: Using HS256 (symmetric HMAC). For production with multiple
services, upgrade to RS256 so verifiers never hold the signing key.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.mx_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

ROLE_ADMIN = "admin"
ROLE_TRADER = "trader"
ROLES = frozenset({ROLE_ADMIN, ROLE_TRADER})


def create_access_token(address: str, role: str = ROLE_TRADER) -> str:
    """Issue a short-lived access token (default: 30 min) for address."""
    now = datetime.now(UTC)
    payload = {
        "sub": address,
        "role": role,
        "type": "access",
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate an access token.

    Raises:
        InvalidCredentialsError: signature, expiry, token type or role is wrong.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if payload.get("type") != "access":
        raise InvalidCredentialsError()
    if payload.get("role") not in ROLES:
        raise InvalidCredentialsError()
    return payload
