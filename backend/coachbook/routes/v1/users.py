# backend/coachbook/routes/v1/users.py
"""
User routes - API v1

Endpoints:
    PUT    /profile → Update the caller's profile
    DELETE /me      → Deactivate the caller's account
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...auth import get_current_active_user
from ...schemas.user import UserEntity
from ...services.dependencies import get_user_service
from ...services.user_service import UserService
from ...utils.helpers import format_success_response
from ...validation.dependencies import validated_body
from ...validation.rule_sets import PROFILE_UPDATE

router = APIRouter(tags=["users-v1"])


@router.put("/profile")
def update_profile(
    current_user: UserEntity = Depends(get_current_active_user),
    data: Dict[str, Any] = Depends(validated_body(PROFILE_UPDATE)),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    user = user_service.update_profile(current_user.id, data)
    return format_success_response("Profile updated successfully", {"user": user.public_dict()})


@router.delete("/me")
def deactivate_account(
    current_user: UserEntity = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    user_service.deactivate(current_user.id)
    return format_success_response("Account deactivated")
