# backend/coachbook/schemas/user.py
"""Canonical user entity shared by both persistence backends."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import EmailStr, Field

from ..core import constants as c
from ..core.enums import DEFAULT_DAYS_AVAILABLE, UserType, VerificationDocumentType, Weekday
from .base import EntityModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Availability(EntityModel):
    timezone: str = c.DEFAULT_TIMEZONE
    working_hours_start: str = c.DEFAULT_WORKING_HOURS_START
    working_hours_end: str = c.DEFAULT_WORKING_HOURS_END
    days_available: List[Weekday] = Field(default_factory=lambda: list(DEFAULT_DAYS_AVAILABLE))


class VerificationDocument(EntityModel):
    type: VerificationDocumentType
    url: str
    uploaded_at: datetime = Field(default_factory=_utcnow)


class UserProfile(EntityModel):
    bio: str = Field("", max_length=c.BIO_MAX_LENGTH)
    experience: str = Field("", max_length=c.EXPERIENCE_MAX_LENGTH)
    skills: List[str] = Field(default_factory=list, max_length=c.SKILLS_MAX_COUNT)
    rating: float = Field(0, ge=c.PROFILE_RATING_MIN, le=c.PROFILE_RATING_MAX)
    total_sessions: int = Field(0, ge=c.TOTAL_SESSIONS_MIN)
    hourly_rate: float = Field(0, ge=c.HOURLY_RATE_MIN)
    profile_picture: str = ""
    availability: Availability = Field(default_factory=Availability)
    is_verified: bool = False
    verification_documents: List[VerificationDocument] = Field(default_factory=list)


class UserEntity(EntityModel):
    """
    A platform user.

    `password_hash` is excluded from every dump, so no serialized form of a
    user can carry it.
    """

    id: Optional[str] = None
    name: str = Field(..., min_length=c.NAME_MIN_LENGTH, max_length=c.NAME_MAX_LENGTH)
    email: EmailStr
    password_hash: Optional[str] = Field(None, exclude=True, repr=False)
    role: UserType
    profile: UserProfile = Field(default_factory=UserProfile)
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_expert(self) -> bool:
        return self.role == UserType.EXPERT.value
