# backend/coachbook/repositories/base_repository.py
"""
Base Repository Pattern for the relational backend.

Repositories only touch the database: no business rules, no commits.
Transactions belong to the service layer (or the request-scoped session).
"""

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Common CRUD operations for one SQLAlchemy model.

    Attributes:
        db: SQLAlchemy session
        model: SQLAlchemy model class
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def get_by_id(self, id: str) -> Optional[T]:
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting {self.model.__name__} by id {id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve {self.model.__name__}: {str(e)}")

    def create(self, **kwargs: Any) -> T:
        """
        Create a new entity.

        Note: Does NOT commit - transaction management is handled by service layer.
        A unique-constraint violation rolls back and raises ConflictException.
        """
        return self.add(self.model(**kwargs))

    def add(self, entity: T) -> T:
        """Persist an already built entity (same rules as `create`)."""
        try:
            self.db.add(entity)
            self.db.flush()  # Get ID without committing
        except IntegrityError as exc:
            self.logger.info(f"Integrity error creating {self.model.__name__}: {exc.orig}")
            self.db.rollback()
            raise ConflictException(
                f"{self.model.__name__} conflicts with an existing record", code="DUPLICATE"
            ) from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}")
        return entity

    def update(self, entity: T, **kwargs: Any) -> T:
        """Set the provided attributes and flush."""
        for key, value in kwargs.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to update {self.model.__name__}: {str(e)}")
        return entity

    def find_one_by(self, **kwargs: Any) -> Optional[T]:
        return self.db.query(self.model).filter_by(**kwargs).first()
