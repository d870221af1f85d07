# backend/coachbook/routes/v1/auth.py
"""
Auth routes - API v1

Endpoints:
    POST /register → Create an account and return a token
    POST /login    → Exchange credentials for a token
    GET  /me       → The authenticated user
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ...auth import get_current_active_user
from ...schemas.user import UserEntity
from ...services.dependencies import get_user_service
from ...services.user_service import UserService
from ...utils.helpers import format_success_response
from ...validation.dependencies import validated_body
from ...validation.rule_sets import LOGIN, REGISTRATION

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth-v1"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    data: Dict[str, Any] = Depends(validated_body(REGISTRATION)),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    user, token = user_service.register(data)
    return format_success_response(
        "User registered successfully", {"user": user.public_dict(), "token": token}
    )


@router.post("/login")
def login(
    data: Dict[str, Any] = Depends(validated_body(LOGIN)),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    user, token = user_service.authenticate(data["email"], data["password"])
    return format_success_response(
        "Login successful", {"user": user.public_dict(), "token": token}
    )


@router.get("/me")
def read_me(current_user: UserEntity = Depends(get_current_active_user)) -> Dict[str, Any]:
    return format_success_response("Current user", {"user": current_user.public_dict()})
