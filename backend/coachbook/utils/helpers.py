# backend/coachbook/utils/helpers.py
"""
Small helpers shared by services and routes.

Response envelopes, pagination, rating arithmetic and permission checks.
"""

from datetime import datetime, timezone
import math
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.enums import UserType

MEETING_BASE_URL = "https://meet.example.com"

_ANGLE_BRACKETS = re.compile(r"[<>]")


def format_pagination(data: Sequence[Any], page: int, limit: int, total: int) -> Dict[str, Any]:
    """
    Wrap one page of results with its pagination metadata.

    Args:
        data: Items of the current page
        page: 1-based page number
        limit: Page size
        total: Total number of items across all pages
    """
    pages = math.ceil(total / limit) if limit else 0
    return {
        "data": list(data),
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": pages,
            "hasNext": page < pages,
            "hasPrev": page > 1,
        },
    }


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def calculate_average_rating(ratings: Iterable[float]) -> float:
    """Mean rating rounded half-up to one decimal; 0 when there is nothing to average."""
    values: List[float] = list(ratings)
    if not values:
        return 0
    mean = sum(values) / len(values)
    return math.floor(mean * 10 + 0.5) / 10


def is_future_date(value: datetime, now: Optional[datetime] = None) -> bool:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value > (now or datetime.now(timezone.utc))


def sanitize_string(value: Any) -> str:
    """Trim and strip angle brackets; non-strings become an empty string."""
    if not isinstance(value, str):
        return ""
    return _ANGLE_BRACKETS.sub("", value.strip())


def generate_meeting_link(session_id: str) -> str:
    return f"{MEETING_BASE_URL}/{session_id}"


def has_permission(
    user_id: str,
    resource_user_id: str,
    user_role: str,
    required_role: Optional[str] = None,
) -> bool:
    """
    Whether a user may access a resource.

    Owners always may. Otherwise a required role must match, and only admins
    are granted access to resources they do not own.
    """
    if user_id == resource_user_id:
        return True
    if required_role and user_role != required_role:
        return False
    return user_role == UserType.ADMIN.value


def format_success_response(message: str, data: Any = None) -> Dict[str, Any]:
    response: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        response["data"] = data
    return response


def format_error_response(
    message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    response: Dict[str, Any] = {"success": False, "message": message}
    if code:
        response["code"] = code
    if details:
        response["details"] = details
    return response
