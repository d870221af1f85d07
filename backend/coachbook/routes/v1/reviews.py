# backend/coachbook/routes/v1/reviews.py
"""
Reviews routes - API v1

Endpoints:
    POST /          → Review the other participant of a completed session
    GET  /{userId}  → Public reviews received by a user, newest first
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ...auth import get_current_active_user
from ...core import constants as c
from ...schemas.user import UserEntity
from ...services.dependencies import get_review_service
from ...services.review_service import ReviewService
from ...utils.helpers import format_pagination, format_success_response
from ...validation.dependencies import validated_body, validated_id, validated_query
from ...validation.rule_sets import PAGINATION, REVIEW

router = APIRouter(tags=["reviews-v1"])


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_review(
    current_user: UserEntity = Depends(get_current_active_user),
    data: Dict[str, Any] = Depends(validated_body(REVIEW)),
    review_service: ReviewService = Depends(get_review_service),
) -> Dict[str, Any]:
    review = review_service.submit(current_user, data)
    return format_success_response("Review submitted successfully", {"review": review.public_dict()})


@router.get("/{userId}")
def list_reviews(
    user_id: str = Depends(validated_id("userId")),
    query: Dict[str, Any] = Depends(validated_query(PAGINATION)),
    review_service: ReviewService = Depends(get_review_service),
) -> Dict[str, Any]:
    page = query.get("page", c.DEFAULT_PAGE)
    limit = query.get("limit", c.DEFAULT_LIMIT)
    reviews, total = review_service.list_for_user(user_id, page, limit)
    return {
        "success": True,
        **format_pagination([review.public_dict() for review in reviews], page, limit, total),
    }
