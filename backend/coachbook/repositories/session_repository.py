# backend/coachbook/repositories/session_repository.py
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..models.session import CoachingSession
from .base_repository import BaseRepository


class SessionRepository(BaseRepository[CoachingSession]):
    """Data access for `CoachingSession`."""

    def __init__(self, db: Session):
        super().__init__(db, CoachingSession)

    def for_participant(self, user_id: str) -> List[CoachingSession]:
        return (
            self.db.query(CoachingSession)
            .filter(
                or_(CoachingSession.candidate_id == user_id, CoachingSession.expert_id == user_id)
            )
            .order_by(CoachingSession.scheduled_date.desc())
            .all()
        )
