from .review import ReviewCategories, ReviewEntity
from .session import SessionEntity
from .user import UserEntity, UserProfile

__all__ = ["ReviewCategories", "ReviewEntity", "SessionEntity", "UserEntity", "UserProfile"]
