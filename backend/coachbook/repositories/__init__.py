from .base_repository import BaseRepository
from .review_repository import ReviewRepository
from .session_repository import SessionRepository
from .user_repository import UserRepository

__all__ = ["BaseRepository", "ReviewRepository", "SessionRepository", "UserRepository"]
