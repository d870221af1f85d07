# backend/coachbook/routes/v1/sessions.py
"""
Session routes - API v1

Endpoints:
    POST /              → Book a session (candidate)
    GET  /              → Sessions the caller takes part in
    GET  /{id}          → One session (participants only)
    PUT  /{id}/status   → Move a session along its lifecycle
"""

from datetime import datetime
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ...auth import get_current_active_user
from ...core.enums import SessionStatus
from ...schemas.user import UserEntity
from ...services.dependencies import get_session_service
from ...services.session_service import SessionService
from ...utils.helpers import format_success_response
from ...validation.dependencies import get_now, validated_body, validated_id
from ...validation.rule_sets import SESSION_BOOKING, STATUS_UPDATE

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions-v1"])


@router.post("", status_code=status.HTTP_201_CREATED)
def book_session(
    current_user: UserEntity = Depends(get_current_active_user),
    data: Dict[str, Any] = Depends(validated_body(SESSION_BOOKING)),
    session_service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    session = session_service.book(current_user, data)
    return format_success_response("Session booked successfully", {"session": session.public_dict()})


@router.get("")
def list_my_sessions(
    current_user: UserEntity = Depends(get_current_active_user),
    session_service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    sessions = session_service.list_for_user(current_user)
    return format_success_response(
        "Sessions retrieved", {"sessions": [session.public_dict() for session in sessions]}
    )


@router.get("/{id}")
def get_session(
    current_user: UserEntity = Depends(get_current_active_user),
    session_id: str = Depends(validated_id("id")),
    session_service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    session = session_service.get_session(session_id, current_user)
    return format_success_response("Session found", {"session": session.public_dict()})


@router.put("/{id}/status")
def update_session_status(
    current_user: UserEntity = Depends(get_current_active_user),
    session_id: str = Depends(validated_id("id")),
    data: Dict[str, Any] = Depends(validated_body(STATUS_UPDATE)),
    session_service: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
) -> Dict[str, Any]:
    session = session_service.update_status(
        session_id, current_user, SessionStatus(data["status"]), at=now
    )
    return format_success_response("Session status updated", {"session": session.public_dict()})
