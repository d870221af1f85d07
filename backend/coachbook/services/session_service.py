# backend/coachbook/services/session_service.py
"""
Session Service for CoachBook

Booking and lifecycle of coaching sessions. There is no scheduling engine:
overlapping bookings are accepted.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..adapters.relational import session_from_row
from ..core.enums import SessionStatus, UserType
from ..core.exceptions import ForbiddenException, NotFoundException
from ..models.session import CoachingSession
from ..repositories.session_repository import SessionRepository
from ..repositories.user_repository import UserRepository
from ..schemas.session import SessionEntity
from ..schemas.user import UserEntity
from ..utils.helpers import generate_meeting_link, has_permission
from ..validation.rules import parse_iso8601
from .base import BaseService

logger = logging.getLogger(__name__)


def session_price(hourly_rate: Optional[float], duration: int) -> float:
    """Price of a session: the expert's hourly rate pro rata."""
    return round((hourly_rate or 0) * duration / 60, 2)


class SessionService(BaseService):
    """Service for booking sessions and moving them through their lifecycle."""

    def __init__(
        self,
        db: Session,
        session_repository: Optional[SessionRepository] = None,
        user_repository: Optional[UserRepository] = None,
    ):
        super().__init__(db)
        self.session_repository = session_repository or SessionRepository(db)
        self.user_repository = user_repository or UserRepository(db)

    def _get_row(self, session_id: str) -> CoachingSession:
        row = self.session_repository.get_by_id(session_id)
        if row is None:
            raise NotFoundException("Session not found", code="SESSION_NOT_FOUND")
        return row

    def _require_access(self, row: CoachingSession, user: UserEntity) -> None:
        if row.involves(user.id):
            return
        if not has_permission(user.id, row.candidate_id, user.role):
            raise ForbiddenException("Not authorized to access this session", code="NOT_PARTICIPANT")

    def book(self, candidate: UserEntity, data: Dict[str, Any]) -> SessionEntity:
        """
        Book a session with an expert.

        Args:
            candidate: The requesting user, who must be a candidate
            data: Validated booking payload

        Raises:
            ForbiddenException: If the requester is not a candidate
            NotFoundException: If the expert does not exist or is inactive
        """
        if candidate.role != UserType.CANDIDATE.value:
            raise ForbiddenException("Only candidates can book sessions", code="CANDIDATE_ONLY")

        expert = self.user_repository.get_by_id(data["expertId"])
        if expert is None or expert.user_type != UserType.EXPERT.value or not expert.is_active:
            raise NotFoundException("Expert not found", code="EXPERT_NOT_FOUND")

        duration = data["duration"]
        self.log_operation("book_session", candidate_id=candidate.id, expert_id=expert.id)
        with self.transaction():
            row = self.session_repository.create(
                candidate_id=candidate.id,
                expert_id=expert.id,
                title=data["title"],
                description=data["description"],
                scheduled_date=parse_iso8601(data["scheduledDate"]).astimezone(timezone.utc),
                duration=duration,
                session_type=data["sessionType"],
                price=session_price(expert.hourly_rate, duration),
            )
            row.meeting_link = generate_meeting_link(row.id)
        self.db.refresh(row)
        self.logger.info(f"Booked session {row.id} with expert {expert.id}")
        return session_from_row(row)

    def get_session(self, session_id: str, user: UserEntity) -> SessionEntity:
        row = self._get_row(session_id)
        self._require_access(row, user)
        return session_from_row(row)

    def list_for_user(self, user: UserEntity) -> List[SessionEntity]:
        return [session_from_row(row) for row in self.session_repository.for_participant(user.id)]

    def update_status(
        self,
        session_id: str,
        user: UserEntity,
        target: SessionStatus,
        at: Optional[datetime] = None,
    ) -> SessionEntity:
        """
        Move a session along its lifecycle.

        Completing a session counts it on the expert's profile.

        Raises:
            InvalidStatusTransitionException: If the change is not allowed
        """
        row = self._get_row(session_id)
        self._require_access(row, user)
        with self.transaction():
            row.transition_to(target, at=at or datetime.now(timezone.utc))
            if target is SessionStatus.COMPLETED:
                expert = self.user_repository.get_by_id(row.expert_id)
                if expert is not None:
                    expert.total_sessions = (expert.total_sessions or 0) + 1
        self.db.refresh(row)
        return session_from_row(row)
