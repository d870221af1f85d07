from .review_service import ReviewService
from .session_service import SessionService
from .user_service import UserService

__all__ = ["ReviewService", "SessionService", "UserService"]
