# backend/coachbook/core/security.py
"""Password hashing and access-token helpers."""

from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional

import jwt
from jwt import PyJWTError
from passlib.context import CryptContext

from .config import settings
from .exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return str(pwd_context.hash(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Returns False instead of raising when the stored hash is malformed.
    """
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except (ValueError, TypeError) as e:
        logger.error(f"Error verifying password: {str(e)}")
        return False


def is_password_hash(value: Optional[str]) -> bool:
    """True when `value` is already a hash this context understands."""
    return bool(value) and pwd_context.identify(value) is not None


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Claims to encode; `sub` should carry the user id
        expires_delta: Lifetime override, defaults to the configured expiry
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire, "iat": datetime.now(timezone.utc)})
    return jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and verify a token, raising UnauthorizedException when invalid or expired."""
    try:
        payload: Dict[str, Any] = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except PyJWTError as e:
        logger.info(f"Rejected access token: {str(e)}")
        raise UnauthorizedException("Invalid or expired token", code="INVALID_TOKEN") from e
    if not payload.get("sub"):
        raise UnauthorizedException("Invalid or expired token", code="INVALID_TOKEN")
    return payload
