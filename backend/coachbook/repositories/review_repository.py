# backend/coachbook/repositories/review_repository.py
"""
Repository for reviews.

Follows repository pattern: no business logic, DB-only operations.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.review import Review
from .base_repository import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Data access for `Review`."""

    def __init__(self, db: Session):
        super().__init__(db, Review)

    def get_for_session_and_reviewer(self, session_id: str, reviewer_id: str) -> Optional[Review]:
        return self.find_one_by(session_id=session_id, reviewer_id=reviewer_id)

    def _public_for_reviewee(self, reviewee_id: str):
        return self.db.query(Review).filter(
            Review.reviewee_id == reviewee_id, Review.is_public.is_(True)
        )

    def list_public_for_reviewee(self, reviewee_id: str, *, skip: int, limit: int) -> List[Review]:
        return (
            self._public_for_reviewee(reviewee_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_public_for_reviewee(self, reviewee_id: str) -> int:
        return self._public_for_reviewee(reviewee_id).count()

    def ratings_for_reviewee(self, reviewee_id: str) -> List[int]:
        rows = self.db.query(Review.rating).filter(Review.reviewee_id == reviewee_id).all()
        return [int(row[0]) for row in rows]
