from .review import Review
from .session import CoachingSession
from .user import User

__all__ = ["CoachingSession", "Review", "User"]
