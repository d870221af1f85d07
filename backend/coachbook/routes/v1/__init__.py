# backend/coachbook/routes/v1/__init__.py
"""Versioned API routers, mounted under /api/v1 by `coachbook.main`."""

from fastapi import APIRouter

from . import auth, experts, health, reviews, sessions, users

api_v1 = APIRouter()
api_v1.include_router(health.router)
api_v1.include_router(auth.router, prefix="/auth")
api_v1.include_router(users.router, prefix="/users")
api_v1.include_router(experts.router, prefix="/experts")
api_v1.include_router(sessions.router, prefix="/sessions")
api_v1.include_router(reviews.router, prefix="/reviews")

__all__ = ["api_v1"]
