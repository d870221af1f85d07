# backend/coachbook/auth.py
"""
Bearer-token authentication dependencies.

Tokens are issued by `UserService` on register/login and carry the user id in
``sub``.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from .adapters.relational import user_from_row
from .core.exceptions import UnauthorizedException
from .core.security import decode_access_token
from .database import get_db
from .repositories.user_repository import UserRepository
from .schemas.user import UserEntity

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> UserEntity:
    """
    Resolve the bearer token to a user.

    Raises:
        UnauthorizedException: Missing, invalid or expired token, or unknown user
    """
    if not token:
        raise UnauthorizedException("Not authenticated", code="NOT_AUTHENTICATED")
    payload = decode_access_token(token)
    user = UserRepository(db).get_by_id(str(payload["sub"]))
    if user is None:
        logger.info(f"Token subject {payload['sub']} no longer exists")
        raise UnauthorizedException("User not found", code="INVALID_TOKEN")
    return user_from_row(user)


def get_current_active_user(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    """Like `get_current_user`, but deactivated accounts are rejected."""
    if not current_user.is_active:
        raise UnauthorizedException("Account is deactivated", code="ACCOUNT_INACTIVE")
    return current_user
