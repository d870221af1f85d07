# backend/coachbook/models/review.py
"""
Review model for the relational backend.

A review belongs to one session; the database allows one review per session
and, independently, one per (session, reviewer) pair. Category sub-ratings are
kept in a JSON column.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core import constants as c
from ..core.ids import generate_ulid
from ..database import Base
from ._constraints import at_least, between, length_between


class Review(Base):
    """Rating and comment left by one session participant about the other."""

    __tablename__ = "reviews"

    id = Column(String(50), primary_key=True, default=generate_ulid)
    session_id = Column("sessionId", String(50), ForeignKey("sessions.id"), nullable=False)
    reviewer_id = Column("reviewerId", String(50), ForeignKey("users.id"), nullable=False)
    reviewee_id = Column("revieweeId", String(50), ForeignKey("users.id"), nullable=False)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    categories = Column(JSON, nullable=False, default=dict)

    is_verified = Column("isVerified", Boolean, nullable=False, default=False)
    is_public = Column("isPublic", Boolean, nullable=False, default=True)
    helpful_votes = Column("helpfulVotes", Integer, nullable=False, default=0)

    created_at = Column("createdAt", DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        "updatedAt", DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    session = relationship("CoachingSession", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint(session_id, name="uq_reviews_session"),
        UniqueConstraint(session_id, reviewer_id, name="uq_reviews_session_reviewer"),
        between("rating", c.RATING_MIN, c.RATING_MAX, "ck_reviews_rating_range"),
        length_between(
            "comment", c.COMMENT_MIN_LENGTH, c.COMMENT_MAX_LENGTH, "ck_reviews_comment_length"
        ),
        at_least("helpfulVotes", c.HELPFUL_VOTES_MIN, "ck_reviews_helpful_votes"),
        Index("idx_reviews_reviewee_created", reviewee_id, created_at),
        Index("idx_reviews_reviewer", reviewer_id),
    )

    def __repr__(self) -> str:
        return f"<Review {self.id}: session={self.session_id}, rating={self.rating}>"
