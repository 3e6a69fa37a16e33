"""FastAPI dependencies: get_caller_address, require_admin.

Usage in any protected router:
    from src.mx_gateway.auth.dependencies import get_caller_address

    @router.post("/protected")
    async def protected(caller: str = Depends(get_caller_address)):
        ...
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.mx_common.addresses import normalize_address
from src.mx_common.errors import AdminRequiredError, AppError, InvalidCredentialsError
from src.mx_gateway.auth.jwt_handler import ROLE_ADMIN, decode_token

# Tokens are minted by the identity service; Swagger UI only needs to paste one
bearer_scheme = HTTPBearer(auto_error=False)

# Reusable 401 exception with WWW-Authenticate header (RFC 6750)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, str]:
    if credentials is None:
        raise _CREDENTIALS_EXCEPTION
    try:
        return decode_token(credentials.credentials)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None


async def get_caller_address(
    request: Request,
    claims: dict[str, str] = Depends(get_token_claims),
) -> str:
    """Return the checksummed account address the token was issued to.

    The address is also stored on request.state.caller for the request log.
    Raises HTTP 401 if the token is missing, invalid, expired or its subject
    is not an account address.
    """
    subject = claims.get("sub")
    if not subject:
        raise _CREDENTIALS_EXCEPTION
    try:
        caller = normalize_address(subject)
    except AppError:
        raise _CREDENTIALS_EXCEPTION from None
    request.state.caller = caller
    return caller


async def require_admin(
    claims: dict[str, str] = Depends(get_token_claims),
    caller: str = Depends(get_caller_address),
) -> str:
    """Verify the caller holds the operator role. Raises HTTP 403 otherwise."""
    if claims.get("role") != ROLE_ADMIN:
        raise AdminRequiredError()
    return caller
