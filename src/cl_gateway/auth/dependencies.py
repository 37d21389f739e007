"""FastAPI dependencies: get_current_caller, require_privileged_caller.

Usage in any protected router:
    from src.cl_gateway.auth.dependencies import require_privileged_caller

    @router.post("/privileged")
    async def privileged(caller: str = Depends(require_privileged_caller)):
        ...

The catalog and settlement domains never check roles; this module is the
only authorization boundary.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from config.settings import settings
from src.cl_common.errors import InvalidCredentialsError, PrivilegedCallerRequiredError
from src.cl_gateway.auth.jwt_handler import decode_token

# Tokens are minted out of band; tokenUrl only feeds Swagger's "Authorize" button
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_caller(token: str = Depends(oauth2_scheme)) -> str:
    """Validate the Bearer token and return the caller's identity (JWT `sub`).

    Raises HTTP 401 if the token is missing, invalid, or expired.
    """
    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    caller: str | None = payload.get("sub")
    if not caller:
        raise _CREDENTIALS_EXCEPTION
    return caller


async def require_privileged_caller(caller: str = Depends(get_current_caller)) -> str:
    """Verify the caller is the configured owner.

    Raises HTTP 403 (AppError code 1002) otherwise.
    """
    if caller != settings.OWNER_ID:
        raise PrivilegedCallerRequiredError()
    return caller
