# backend/coachbook/adapters/relational.py
"""Canonical entity <-> SQLAlchemy row mapping."""

from datetime import datetime, timezone
import logging
from typing import Any, Dict

from ..core.enums import VerificationDocumentType
from ..core.security import is_password_hash
from ..models import CoachingSession, Review, User
from ..schemas.review import ReviewCategories, ReviewEntity
from ..schemas.session import (
    Attachment,
    FeedbackEntry,
    Reminder,
    SessionEntity,
    SessionFeedback,
    SessionNotes,
)
from ..schemas.user import Availability, UserEntity, UserProfile, VerificationDocument

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


def _documents_from_row(row: User) -> list[VerificationDocument]:
    uploaded_at = _as_utc(row.updated_at or row.created_at) or datetime.now(timezone.utc)
    documents: list[VerificationDocument] = []
    if row.resume_path:
        documents.append(
            VerificationDocument(
                type=VerificationDocumentType.RESUME, url=row.resume_path, uploaded_at=uploaded_at
            )
        )
    for path in row.certification_paths or []:
        documents.append(
            VerificationDocument(
                type=VerificationDocumentType.CERTIFICATE, url=path, uploaded_at=uploaded_at
            )
        )
    return documents


def user_from_row(row: User) -> UserEntity:
    profile = UserProfile(
        bio=row.bio or "",
        experience=row.experience or "",
        skills=list(row.skills or []),
        rating=row.rating or 0,
        total_sessions=row.total_sessions or 0,
        hourly_rate=row.hourly_rate or 0,
        profile_picture=row.profile_photo_path or "",
        availability=Availability(
            timezone=row.timezone,
            working_hours_start=row.working_hours_start,
            working_hours_end=row.working_hours_end,
            days_available=list(row.days_available or []),
        ),
        is_verified=bool(row.is_verified),
        verification_documents=_documents_from_row(row),
    )
    return UserEntity(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.hashed_password,
        role=row.user_type,
        profile=profile,
        is_active=bool(row.is_active),
        last_login=_as_utc(row.last_login),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def user_row_values(entity: UserEntity) -> Dict[str, Any]:
    """
    Column values for a `User` row.

    Portfolio documents have no relational column and are not carried over.
    """
    profile = entity.profile
    documents = profile.verification_documents
    resumes = [doc.url for doc in documents if doc.type == VerificationDocumentType.RESUME.value]
    certificates = [
        doc.url for doc in documents if doc.type == VerificationDocumentType.CERTIFICATE.value
    ]
    dropped = len(documents) - len(resumes) - len(certificates)
    if dropped:
        logger.debug(f"Dropping {dropped} portfolio document(s) for user {entity.id}")

    values: Dict[str, Any] = {
        "name": entity.name,
        "email": entity.email,
        "user_type": entity.role,
        "is_active": entity.is_active,
        "last_login": entity.last_login,
        "bio": profile.bio,
        "experience": profile.experience,
        "skills": list(profile.skills),
        "rating": profile.rating,
        "total_sessions": profile.total_sessions,
        "hourly_rate": profile.hourly_rate,
        "is_verified": profile.is_verified,
        "profile_photo_path": profile.profile_picture or None,
        "timezone": profile.availability.timezone,
        "working_hours_start": profile.availability.working_hours_start,
        "working_hours_end": profile.availability.working_hours_end,
        "days_available": list(profile.availability.days_available),
        "resume_path": resumes[0] if resumes else None,
        "certification_paths": certificates,
    }
    if entity.password_hash:
        if not is_password_hash(entity.password_hash):
            raise ValueError(f"User {entity.id} carries a password that is not a bcrypt hash")
        values["hashed_password"] = entity.password_hash
    if entity.id:
        values["id"] = entity.id
    return values


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


def session_from_row(row: CoachingSession) -> SessionEntity:
    return SessionEntity(
        id=row.id,
        candidate_id=row.candidate_id,
        expert_id=row.expert_id,
        title=row.title,
        description=row.description,
        scheduled_date=_as_utc(row.scheduled_date),
        duration=row.duration,
        status=row.status,
        session_type=row.session_type,
        meeting_link=row.meeting_link or "",
        meeting_id=row.meeting_id or "",
        price=row.price or 0,
        payment_status=row.payment_status,
        payment_id=row.payment_id or "",
        notes=SessionNotes(candidate=row.candidate_notes or "", expert=row.expert_notes or ""),
        feedback=SessionFeedback(
            candidate=FeedbackEntry(
                rating=row.candidate_feedback_rating, comment=row.candidate_feedback_comment
            ),
            expert=FeedbackEntry(
                rating=row.expert_feedback_rating, comment=row.expert_feedback_comment
            ),
        ),
        attachments=[Attachment.model_validate(item) for item in row.attachments or []],
        reminders=[Reminder.model_validate(item) for item in row.reminders or []],
        actual_start_time=_as_utc(row.actual_start_time),
        actual_end_time=_as_utc(row.actual_end_time),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def session_row_values(entity: SessionEntity) -> Dict[str, Any]:
    values: Dict[str, Any] = {
        "candidate_id": entity.candidate_id,
        "expert_id": entity.expert_id,
        "title": entity.title,
        "description": entity.description,
        "scheduled_date": entity.scheduled_date,
        "duration": entity.duration,
        "status": entity.status,
        "session_type": entity.session_type,
        "meeting_link": entity.meeting_link,
        "meeting_id": entity.meeting_id,
        "price": entity.price,
        "payment_status": entity.payment_status,
        "payment_id": entity.payment_id,
        "candidate_notes": entity.notes.candidate,
        "expert_notes": entity.notes.expert,
        "candidate_feedback_rating": entity.feedback.candidate.rating,
        "candidate_feedback_comment": entity.feedback.candidate.comment,
        "expert_feedback_rating": entity.feedback.expert.rating,
        "expert_feedback_comment": entity.feedback.expert.comment,
        "attachments": [item.model_dump(mode="json", by_alias=True) for item in entity.attachments],
        "reminders": [item.model_dump(mode="json", by_alias=True) for item in entity.reminders],
        "actual_start_time": entity.actual_start_time,
        "actual_end_time": entity.actual_end_time,
    }
    if entity.id:
        values["id"] = entity.id
    return values


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------


def review_from_row(row: Review) -> ReviewEntity:
    return ReviewEntity(
        id=row.id,
        session_id=row.session_id,
        reviewer_id=row.reviewer_id,
        reviewee_id=row.reviewee_id,
        rating=row.rating,
        comment=row.comment,
        categories=ReviewCategories.model_validate(row.categories or {}),
        is_verified=bool(row.is_verified),
        is_public=bool(row.is_public),
        helpful_votes=row.helpful_votes or 0,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def review_row_values(entity: ReviewEntity) -> Dict[str, Any]:
    values: Dict[str, Any] = {
        "session_id": entity.session_id,
        "reviewer_id": entity.reviewer_id,
        "reviewee_id": entity.reviewee_id,
        "rating": entity.rating,
        "comment": entity.comment,
        "categories": entity.categories.present(),
        "is_verified": entity.is_verified,
        "is_public": entity.is_public,
        "helpful_votes": entity.helpful_votes,
    }
    if entity.id:
        values["id"] = entity.id
    return values
