"""Session token issuing and verification.

Tokens are HS256 JWTs binding the user id, username, and role id at issuance.
They prove identity only: the guard re-reads the live role from the store.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import pytz
from jose import JWTError, jwt

from classroom_api import config
from classroom_api.core.exceptions import AuthenticationError, ConfigurationError


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""

    user_id: int
    username: str
    role_id: int


def _secret_key() -> str:
    if not config.JWT_SECRET_KEY:
        raise ConfigurationError("JWT_SECRET_KEY must be set")
    return config.JWT_SECRET_KEY


def create_access_token(
    user_id: int,
    username: str,
    role_id: int,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed, time-limited access token.

    Args:
        user_id: ID of the authenticated user.
        username: Username of the authenticated user.
        role_id: Role of the user at issuance time.
        expires_delta: Optional lifetime; defaults to
            ACCESS_TOKEN_EXPIRE_MINUTES (24 hours).

    Returns:
        Encoded JWT token string.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(pytz.utc) + expires_delta
    to_encode = {
        "sub": str(user_id),
        "userId": user_id,
        "username": username,
        "roleId": role_id,
        "exp": expire,
    }
    return jwt.encode(to_encode, _secret_key(), algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    """Verify a token and return its claims.

    Args:
        token: Encoded JWT token string.

    Returns:
        TokenClaims with user id, username and role id.

    Raises:
        AuthenticationError: If the signature is invalid, the token is
            expired, or required claims are missing.
    """
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[config.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid token")

    user_id = payload.get("userId")
    username = payload.get("username")
    role_id = payload.get("roleId")
    if not isinstance(user_id, int) or username is None or role_id is None:
        raise AuthenticationError("Invalid token")
    return TokenClaims(user_id=user_id, username=username, role_id=role_id)
