# backend/coachbook/models/session.py
"""
Coaching session model for the relational backend.

A session is a booking between a candidate and an expert. `status` and
`paymentStatus` evolve independently. Notes and feedback are stored flat;
reminders and attachments are JSON columns.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Optional

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core import constants as c
from ..core.enums import PaymentStatus, SessionStatus, SessionType
from ..core.exceptions import InvalidStatusTransitionException
from ..core.ids import generate_ulid
from ..database import Base
from ._constraints import at_least, between, length_between, one_of

logger = logging.getLogger(__name__)


class CoachingSession(Base):
    """Booking between a candidate and an expert (table `sessions`)."""

    __tablename__ = "sessions"

    id = Column(String(50), primary_key=True, index=True, default=generate_ulid)
    title = Column(String(c.TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=False)
    scheduled_date = Column("scheduledDate", DateTime(timezone=True), nullable=False)
    duration = Column(Integer, nullable=False, default=c.DURATION_DEFAULT_MINUTES)
    session_type = Column("sessionType", String(30), nullable=False)
    status = Column(String(20), nullable=False, default=SessionStatus.PENDING.value)

    candidate_id = Column("candidateId", String(50), ForeignKey("users.id"), nullable=False)
    expert_id = Column("expertId", String(50), ForeignKey("users.id"), nullable=False)

    price = Column("paymentAmount", Float, nullable=False, default=0)
    payment_status = Column(
        "paymentStatus", String(20), nullable=False, default=PaymentStatus.PENDING.value
    )
    payment_method = Column("paymentMethod", String(50), nullable=True)
    payment_id = Column("paymentId", String(255), nullable=False, default="")

    meeting_link = Column("meetingLink", String, nullable=False, default="")
    meeting_id = Column("meetingId", String(255), nullable=False, default="")

    candidate_notes = Column("candidateNotes", Text, nullable=False, default="")
    expert_notes = Column("expertNotes", Text, nullable=False, default="")

    candidate_feedback_rating = Column("candidateFeedbackRating", Integer, nullable=True)
    candidate_feedback_comment = Column("candidateFeedbackComment", Text, nullable=True)
    expert_feedback_rating = Column("feedbackRating", Integer, nullable=True)
    expert_feedback_comment = Column("feedbackComment", Text, nullable=True)
    feedback_date = Column("feedbackDate", DateTime(timezone=True), nullable=True)

    attachments = Column(JSON, nullable=False, default=list)
    reminders = Column(JSON, nullable=False, default=list)

    actual_start_time = Column("actualStartTime", DateTime(timezone=True), nullable=True)
    actual_end_time = Column("actualEndTime", DateTime(timezone=True), nullable=True)

    created_at = Column("createdAt", DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        "updatedAt", DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    candidate = relationship("User", foreign_keys=[candidate_id], back_populates="candidate_sessions")
    expert = relationship("User", foreign_keys=[expert_id], back_populates="expert_sessions")
    reviews = relationship("Review", back_populates="session")

    __table_args__ = (
        length_between("title", c.TITLE_MIN_LENGTH, c.TITLE_MAX_LENGTH, "ck_sessions_title_length"),
        length_between(
            "description",
            c.DESCRIPTION_MIN_LENGTH,
            c.DESCRIPTION_MAX_LENGTH,
            "ck_sessions_description_length",
        ),
        between(
            "duration", c.DURATION_MIN_MINUTES, c.DURATION_MAX_MINUTES, "ck_sessions_duration_range"
        ),
        at_least("paymentAmount", c.PRICE_MIN, "ck_sessions_price"),
        one_of("status", SessionStatus, "ck_sessions_status"),
        one_of("sessionType", SessionType, "ck_sessions_type"),
        one_of("paymentStatus", PaymentStatus, "ck_sessions_payment_status"),
        length_between(
            "candidateNotes", None, c.SESSION_NOTE_MAX_LENGTH, "ck_sessions_candidate_notes"
        ),
        length_between("expertNotes", None, c.SESSION_NOTE_MAX_LENGTH, "ck_sessions_expert_notes"),
        Index("idx_sessions_candidate_date", candidate_id, scheduled_date),
        Index("idx_sessions_expert_date", expert_id, scheduled_date),
        Index("idx_sessions_status", status),
        Index("idx_sessions_scheduled_date", scheduled_date),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if not self.status:
            self.status = SessionStatus.PENDING.value
        if not self.payment_status:
            self.payment_status = PaymentStatus.PENDING.value

    def __repr__(self) -> str:
        return (
            f"<CoachingSession {self.id}: candidate={self.candidate_id}, "
            f"expert={self.expert_id}, at={self.scheduled_date}, status={self.status}>"
        )

    def transition_to(self, target: SessionStatus, *, at: Optional[datetime] = None) -> None:
        """
        Move to `target` if the lifecycle allows it.

        Raises:
            InvalidStatusTransitionException: for any change outside the
                declared pending → confirmed → in-progress → completed path and
                its cancelled / no-show exits.
        """
        current = SessionStatus(self.status)
        if not current.can_transition_to(target):
            raise InvalidStatusTransitionException(current.value, target.value)

        moment = at or datetime.now(timezone.utc)
        if target is SessionStatus.IN_PROGRESS and self.actual_start_time is None:
            self.actual_start_time = moment
        if target is SessionStatus.COMPLETED:
            if self.actual_start_time is None:
                self.actual_start_time = self.scheduled_date
            self.actual_end_time = moment
        self.status = target.value
        logger.info(f"Session {self.id} moved from {current.value} to {target.value}")

    def involves(self, user_id: str) -> bool:
        return user_id in (self.candidate_id, self.expert_id)

    def counterpart_of(self, user_id: str) -> str:
        """The other participant's id."""
        return str(self.expert_id if user_id == self.candidate_id else self.candidate_id)
