# backend/coachbook/routes/v1/health.py
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from ...core.config import settings

router = APIRouter(tags=["health-v1"])


@router.get("/health")
def health() -> Dict[str, Any]:
    return {
        "success": True,
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
