# backend/coachbook/database.py
"""
Database engine, session factory, and metadata for the relational backend.
"""

import logging
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine; SQLite connections are shared across threads."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, future=True, **kwargs)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def init_db(bind: Engine = engine) -> None:
    """Create all tables if they do not exist."""
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Relational schema verified")


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, committed on success."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
