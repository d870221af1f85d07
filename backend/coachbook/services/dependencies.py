# backend/coachbook/services/dependencies.py
"""FastAPI dependency providers for the service layer."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .review_service import ReviewService
from .session_service import SessionService
from .user_service import UserService


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_session_service(db: Session = Depends(get_db)) -> SessionService:
    return SessionService(db)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)
