# backend/coachbook/schemas/review.py
"""Canonical review entity shared by both persistence backends."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..core import constants as c
from .base import EntityModel

_SubRating = Optional[int]


class ReviewCategories(EntityModel):
    professionalism: _SubRating = Field(None, ge=c.RATING_MIN, le=c.RATING_MAX)
    communication: _SubRating = Field(None, ge=c.RATING_MIN, le=c.RATING_MAX)
    expertise: _SubRating = Field(None, ge=c.RATING_MIN, le=c.RATING_MAX)
    punctuality: _SubRating = Field(None, ge=c.RATING_MIN, le=c.RATING_MAX)
    helpfulness: _SubRating = Field(None, ge=c.RATING_MIN, le=c.RATING_MAX)

    def present(self) -> dict[str, int]:
        """Only the sub-ratings that were given."""
        return self.model_dump(exclude_none=True)


class ReviewEntity(EntityModel):
    id: Optional[str] = None
    session_id: str
    reviewer_id: str
    reviewee_id: str
    rating: int = Field(..., ge=c.RATING_MIN, le=c.RATING_MAX)
    comment: str = Field(..., min_length=c.COMMENT_MIN_LENGTH, max_length=c.COMMENT_MAX_LENGTH)
    categories: ReviewCategories = Field(default_factory=ReviewCategories)
    is_verified: bool = False
    is_public: bool = True
    helpful_votes: int = Field(0, ge=c.HELPFUL_VOTES_MIN)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
