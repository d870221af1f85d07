# backend/coachbook/models/user.py
"""
User model for the relational backend.

Candidates, experts and admins share one table, told apart by the free-form
`userType` column. The expert profile is stored flat on the row; list-valued
profile fields are JSON columns. Column names keep the camelCase names of the
existing database.
"""

import logging
from typing import Any

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func

from ..core import constants as c
from ..core.enums import DEFAULT_DAYS_AVAILABLE
from ..core.ids import generate_ulid
from ..core.security import get_password_hash, verify_password
from ..database import Base
from ._constraints import at_least, between, length_between

logger = logging.getLogger(__name__)


class User(Base):
    """
    Account row for every platform user.

    Attributes:
        id: ULID primary key
        email: Unique, lower-cased login address
        hashed_password: Bcrypt hash, stored in the `password` column
        user_type: candidate, expert or admin
        is_active: Soft-deactivation flag; users are never hard-deleted
        bio, experience, skills, hourly_rate, rating: Expert profile
    """

    __tablename__ = "users"

    id = Column(String(50), primary_key=True, index=True, default=generate_ulid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(c.NAME_MAX_LENGTH), nullable=False)
    hashed_password = Column("password", String, nullable=False)
    user_type = Column("userType", String(20), nullable=False)
    phone = Column(String(20), nullable=True)
    company = Column(String(100), nullable=True)
    title = Column(String(100), nullable=True)
    avatar = Column(String, nullable=True)
    is_active = Column("isActive", Boolean, nullable=False, default=True)
    last_login = Column("lastLogin", DateTime(timezone=True), nullable=True)
    created_at = Column("createdAt", DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        "updatedAt", DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Profile
    bio = Column(Text, nullable=True)
    experience = Column(Text, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    rating = Column(Float, nullable=False, default=0)
    total_sessions = Column("totalSessions", Integer, nullable=False, default=0)
    hourly_rate = Column("hourlyRate", Float, nullable=True, default=0)
    is_verified = Column("isVerified", Boolean, nullable=False, default=False)
    years_of_experience = Column("yearsOfExperience", String(20), nullable=True)
    timezone = Column(String(50), nullable=False, default=c.DEFAULT_TIMEZONE)
    working_hours_start = Column(
        "workingHoursStart", String(5), nullable=False, default=c.DEFAULT_WORKING_HOURS_START
    )
    working_hours_end = Column(
        "workingHoursEnd", String(5), nullable=False, default=c.DEFAULT_WORKING_HOURS_END
    )
    days_available = Column(
        "daysAvailable",
        JSON,
        nullable=False,
        default=lambda: [day.value for day in DEFAULT_DAYS_AVAILABLE],
    )
    resume_path = Column("resumePath", String, nullable=True)
    profile_photo_path = Column("profilePhotoPath", String, nullable=True)
    certification_paths = Column("certificationPaths", JSON, nullable=False, default=list)

    candidate_sessions = relationship(
        "CoachingSession", foreign_keys="CoachingSession.candidate_id", back_populates="candidate"
    )
    expert_sessions = relationship(
        "CoachingSession", foreign_keys="CoachingSession.expert_id", back_populates="expert"
    )

    __table_args__ = (
        length_between("name", c.NAME_MIN_LENGTH, c.NAME_MAX_LENGTH, "ck_users_name_length"),
        length_between("bio", None, c.BIO_MAX_LENGTH, "ck_users_bio_length", nullable=True),
        length_between(
            "experience", None, c.EXPERIENCE_MAX_LENGTH, "ck_users_experience_length", nullable=True
        ),
        between("rating", c.PROFILE_RATING_MIN, c.PROFILE_RATING_MAX, "ck_users_rating_range"),
        at_least("hourlyRate", c.HOURLY_RATE_MIN, "ck_users_hourly_rate", nullable=True),
        at_least("totalSessions", c.TOTAL_SESSIONS_MIN, "ck_users_total_sessions"),
    )

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email} ({self.user_type})>"

    @validates("email")
    def _normalize_email(self, _key: str, value: str) -> str:
        return value.strip().lower() if isinstance(value, str) else value

    @validates("skills")
    def _check_skills(self, _key: str, value: Any) -> Any:
        if value is not None and len(value) > c.SKILLS_MAX_COUNT:
            raise ValueError(f"Cannot have more than {c.SKILLS_MAX_COUNT} skills")
        return value

    def set_password(self, password: str) -> bool:
        """
        Hash and store a plaintext `password`.

        Input is always treated as plaintext, even when it looks like a hash.
        Rows copied from another backend carry their hash in `hashed_password`
        directly (see `coachbook.adapters.relational.user_row_values`).

        Returns:
            True when the stored hash changed.
        """
        if self.hashed_password and verify_password(password, self.hashed_password):
            return False
        self.hashed_password = get_password_hash(password)
        return True

    def check_password(self, password: str) -> bool:
        return bool(self.hashed_password) and verify_password(password, self.hashed_password)
