"""JWT token creation and verification.

Tokens identify the caller only; whether that caller is privileged is
decided by the dependencies in src.cl_gateway.auth.dependencies.

HS256 (symmetric HMAC) with the single JWT_SECRET from settings. No token
revocation: once issued, tokens are valid until expiry.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.cl_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(subject: str, expires_in: timedelta | None = None) -> str:
    """Issue an access token for `subject` (default lifetime: JWT_EXPIRE_MINUTES)."""
    now = datetime.now(UTC)
    payload = {
        "sub": subject,
        "type": "access",
        "iat": now,
        "exp": now + (expires_in if expires_in is not None else _ACCESS_EXPIRE),
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate an access token.

    Raises:
        InvalidCredentialsError: signature, expiry or token type is wrong.
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

    return payload
