# backend/coachbook/routes/v1/experts.py
"""
Expert directory routes - API v1 (public)

Endpoints:
    GET /      → Active experts, best rated first
    GET /{id}  → One expert
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...core import constants as c
from ...services.dependencies import get_user_service
from ...services.user_service import UserService
from ...utils.helpers import format_pagination, format_success_response
from ...validation.dependencies import validated_id, validated_query
from ...validation.rule_sets import PAGINATION

router = APIRouter(tags=["experts-v1"])


@router.get("")
def list_experts(
    query: Dict[str, Any] = Depends(validated_query(PAGINATION)),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    page = query.get("page", c.DEFAULT_PAGE)
    limit = query.get("limit", c.DEFAULT_LIMIT)
    experts, total = user_service.list_experts(page, limit)
    return {
        "success": True,
        **format_pagination([expert.public_dict() for expert in experts], page, limit, total),
    }


@router.get("/{id}")
def get_expert(
    expert_id: str = Depends(validated_id("id")),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    expert = user_service.get_expert(expert_id)
    return format_success_response("Expert found", {"expert": expert.public_dict()})
