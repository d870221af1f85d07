# backend/coachbook/schemas/session.py
"""Canonical coaching-session entity shared by both persistence backends."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..core import constants as c
from ..core.enums import PaymentStatus, ReminderChannel, ReminderStatus, SessionStatus, SessionType
from .base import EntityModel


class SessionNotes(EntityModel):
    candidate: str = Field("", max_length=c.SESSION_NOTE_MAX_LENGTH)
    expert: str = Field("", max_length=c.SESSION_NOTE_MAX_LENGTH)


class FeedbackEntry(EntityModel):
    rating: Optional[int] = Field(None, ge=c.RATING_MIN, le=c.RATING_MAX)
    comment: Optional[str] = Field(None, max_length=c.FEEDBACK_COMMENT_MAX_LENGTH)


class SessionFeedback(EntityModel):
    candidate: FeedbackEntry = Field(default_factory=FeedbackEntry)
    expert: FeedbackEntry = Field(default_factory=FeedbackEntry)


class Attachment(EntityModel):
    name: str
    url: str
    uploaded_by: Optional[str] = None
    uploaded_at: Optional[datetime] = None


class Reminder(EntityModel):
    type: ReminderChannel
    sent_at: Optional[datetime] = None
    status: ReminderStatus = ReminderStatus.PENDING


class SessionEntity(EntityModel):
    id: Optional[str] = None
    candidate_id: str
    expert_id: str
    title: str = Field(..., min_length=c.TITLE_MIN_LENGTH, max_length=c.TITLE_MAX_LENGTH)
    description: str = Field(
        ..., min_length=c.DESCRIPTION_MIN_LENGTH, max_length=c.DESCRIPTION_MAX_LENGTH
    )
    scheduled_date: datetime
    duration: int = Field(
        c.DURATION_DEFAULT_MINUTES, ge=c.DURATION_MIN_MINUTES, le=c.DURATION_MAX_MINUTES
    )
    status: SessionStatus = SessionStatus.PENDING
    session_type: SessionType
    meeting_link: str = ""
    meeting_id: str = ""
    price: float = Field(0, ge=c.PRICE_MIN)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_id: str = ""
    notes: SessionNotes = Field(default_factory=SessionNotes)
    feedback: SessionFeedback = Field(default_factory=SessionFeedback)
    attachments: List[Attachment] = Field(default_factory=list)
    reminders: List[Reminder] = Field(default_factory=list)
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
