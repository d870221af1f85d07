# backend/coachbook/repositories/user_repository.py
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import UserType
from ..models.user import User
from .base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access for `User`."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def _active_experts(self):
        return self.db.query(User).filter(
            User.user_type == UserType.EXPERT.value, User.is_active.is_(True)
        )

    def list_active_experts(self, *, skip: int, limit: int) -> List[User]:
        return (
            self._active_experts()
            .order_by(User.rating.desc(), User.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_active_experts(self) -> int:
        return self._active_experts().count()
