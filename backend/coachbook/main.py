# backend/coachbook/main.py
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .database import init_db
from .errors import register_error_handlers
from .routes.v1 import api_v1

API_TITLE = "CoachBook API"
API_DESCRIPTION = "Session-booking marketplace connecting candidates with career experts"
API_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{settings.app_name} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    init_db()
    yield
    logger.info(f"{settings.app_name} API shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    logger.info("CORS allow_origins=%s", settings.cors_origin_list)

    app.include_router(api_v1, prefix="/api/v1")
    return app


app = create_app()
