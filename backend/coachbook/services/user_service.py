# backend/coachbook/services/user_service.py
"""
User Service for CoachBook

Registration, authentication, profile maintenance and the public expert
directory. Routes hand in payloads that already passed their rule set.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from ..adapters.relational import user_from_row
from ..core.enums import UserType
from ..core.exceptions import ConflictException, NotFoundException, UnauthorizedException
from ..core.security import create_access_token
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user import UserEntity
from ..utils.helpers import page_offset, sanitize_string
from .base import BaseService

logger = logging.getLogger(__name__)

# Validated payload keys -> User columns
PROFILE_FIELDS: Dict[str, str] = {
    "bio": "bio",
    "experience": "experience",
    "skills": "skills",
    "hourlyRate": "hourly_rate",
}


def issue_token(user: User) -> str:
    return create_access_token({"sub": user.id, "role": user.user_type})


class UserService(BaseService):
    """Service for account and expert-directory operations."""

    def __init__(self, db: Session, user_repository: Optional[UserRepository] = None):
        super().__init__(db)
        self.user_repository = user_repository or UserRepository(db)

    def _get_row(self, user_id: str) -> User:
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found", code="USER_NOT_FOUND")
        return user

    def register(self, data: Dict[str, Any]) -> Tuple[UserEntity, str]:
        """
        Create an account from a validated registration payload.

        `userType` wins over `role` when both are given (the rule set already
        guarantees they agree).

        Returns:
            The new user and an access token

        Raises:
            ConflictException: If the email is already registered
        """
        email = data["email"]
        role = data.get("userType") or data.get("role")
        self.log_operation("register", email=email, role=role)

        if self.user_repository.get_by_email(email) is not None:
            self.logger.warning(f"Registration failed - email already exists: {email}")
            raise ConflictException("User already exists with this email", code="EMAIL_EXISTS")

        with self.transaction():
            user = User(name=data["name"], email=email, user_type=role)
            user.set_password(data["password"])
            self.user_repository.add(user)
        self.db.refresh(user)

        self.logger.info(f"Registered {role} {user.id}")
        return user_from_row(user), issue_token(user)

    def authenticate(self, email: str, password: str) -> Tuple[UserEntity, str]:
        """
        Check credentials and stamp `lastLogin`.

        Raises:
            UnauthorizedException: Unknown email, wrong password or deactivated account
        """
        user = self.user_repository.get_by_email(email)
        if user is None or not user.check_password(password):
            self.logger.info(f"Failed login for {email}")
            raise UnauthorizedException("Invalid credentials", code="INVALID_CREDENTIALS")
        if not user.is_active:
            raise UnauthorizedException("Account is deactivated", code="ACCOUNT_INACTIVE")

        with self.transaction():
            user.last_login = datetime.now(timezone.utc)
        self.db.refresh(user)
        return user_from_row(user), issue_token(user)

    def get_user(self, user_id: str) -> UserEntity:
        return user_from_row(self._get_row(user_id))

    def update_profile(self, user_id: str, data: Dict[str, Any]) -> UserEntity:
        """Apply the validated `profile` fields that were sent; others stay untouched."""
        user = self._get_row(user_id)
        profile = data.get("profile")
        if not isinstance(profile, Mapping):
            profile = {}
        changes: Dict[str, Any] = {}
        for key, column in PROFILE_FIELDS.items():
            if key in profile:
                changes[column] = profile[key]
        if "skills" in changes:
            changes["skills"] = [sanitize_string(str(skill)) for skill in changes["skills"]]

        self.log_operation("update_profile", user_id=user_id, fields=sorted(changes))
        with self.transaction():
            self.user_repository.update(user, **changes)
        self.db.refresh(user)
        return user_from_row(user)

    def deactivate(self, user_id: str) -> UserEntity:
        """Soft delete: the row stays, `isActive` goes false."""
        user = self._get_row(user_id)
        with self.transaction():
            self.user_repository.update(user, is_active=False)
        self.db.refresh(user)
        self.logger.info(f"Deactivated user {user_id}")
        return user_from_row(user)

    def get_expert(self, expert_id: str) -> UserEntity:
        user = self.user_repository.get_by_id(expert_id)
        if user is None or user.user_type != UserType.EXPERT.value or not user.is_active:
            raise NotFoundException("Expert not found", code="EXPERT_NOT_FOUND")
        return user_from_row(user)

    def list_experts(self, page: int, limit: int) -> Tuple[List[UserEntity], int]:
        rows = self.user_repository.list_active_experts(skip=page_offset(page, limit), limit=limit)
        return [user_from_row(row) for row in rows], self.user_repository.count_active_experts()
