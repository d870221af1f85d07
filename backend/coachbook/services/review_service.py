# backend/coachbook/services/review_service.py
"""
Review Service for CoachBook

Participants of a completed session review each other. Each new review
refreshes the reviewee's average rating.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from ..adapters.relational import review_from_row
from ..core.enums import SessionStatus
from ..core.exceptions import (
    BusinessRuleException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
)
from ..repositories.review_repository import ReviewRepository
from ..repositories.session_repository import SessionRepository
from ..repositories.user_repository import UserRepository
from ..schemas.review import ReviewCategories, ReviewEntity
from ..schemas.user import UserEntity
from ..utils.helpers import calculate_average_rating, page_offset
from .base import BaseService

logger = logging.getLogger(__name__)


class ReviewService(BaseService):
    """Service for submitting and listing reviews."""

    def __init__(
        self,
        db: Session,
        review_repository: Optional[ReviewRepository] = None,
        session_repository: Optional[SessionRepository] = None,
        user_repository: Optional[UserRepository] = None,
    ):
        super().__init__(db)
        self.review_repository = review_repository or ReviewRepository(db)
        self.session_repository = session_repository or SessionRepository(db)
        self.user_repository = user_repository or UserRepository(db)

    def submit(self, reviewer: UserEntity, data: Dict[str, Any]) -> ReviewEntity:
        """
        Record a review of the other participant of a completed session.

        Raises:
            NotFoundException: Unknown session
            ForbiddenException: Reviewer did not take part in the session
            BusinessRuleException: Session is not completed
            ConflictException: Session already reviewed
        """
        session = self.session_repository.get_by_id(data["sessionId"])
        if session is None:
            raise NotFoundException("Session not found", code="SESSION_NOT_FOUND")
        if not session.involves(reviewer.id):
            raise ForbiddenException(
                "Only session participants can review it", code="NOT_PARTICIPANT"
            )
        if session.status != SessionStatus.COMPLETED.value:
            raise BusinessRuleException(
                "Can only review completed sessions", code="SESSION_NOT_COMPLETED"
            )
        if self.review_repository.get_for_session_and_reviewer(session.id, reviewer.id):
            raise ConflictException("You have already reviewed this session", code="ALREADY_REVIEWED")

        reviewee_id = session.counterpart_of(reviewer.id)
        raw_categories = data.get("categories")
        categories = ReviewCategories.model_validate(
            raw_categories if isinstance(raw_categories, Mapping) else {}
        )
        self.log_operation("submit_review", session_id=session.id, reviewer_id=reviewer.id)

        with self.transaction():
            review = self.review_repository.create(
                session_id=session.id,
                reviewer_id=reviewer.id,
                reviewee_id=reviewee_id,
                rating=data["rating"],
                comment=data["comment"],
                categories=categories.present(),
            )
            self._refresh_rating(reviewee_id)
        self.db.refresh(review)
        return review_from_row(review)

    def _refresh_rating(self, reviewee_id: str) -> None:
        reviewee = self.user_repository.get_by_id(reviewee_id)
        if reviewee is None:
            return
        ratings = self.review_repository.ratings_for_reviewee(reviewee_id)
        reviewee.rating = calculate_average_rating(ratings)
        self.logger.debug(f"Rating of {reviewee_id} is now {reviewee.rating} over {len(ratings)}")

    def list_for_user(self, user_id: str, page: int, limit: int) -> Tuple[List[ReviewEntity], int]:
        if self.user_repository.get_by_id(user_id) is None:
            raise NotFoundException("User not found", code="USER_NOT_FOUND")
        rows = self.review_repository.list_public_for_reviewee(
            user_id, skip=page_offset(page, limit), limit=limit
        )
        total = self.review_repository.count_public_for_reviewee(user_id)
        return [review_from_row(row) for row in rows], total
