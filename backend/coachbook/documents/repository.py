# backend/coachbook/documents/repository.py
"""
Repositories for the document backend.

Same contract as the relational repositories: no business logic, only data
access, returning canonical entities. Unique-index violations surface as
`ConflictException`.
"""

import logging
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar

from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..adapters import document as adapter
from ..core.exceptions import ConflictException, RepositoryException
from ..schemas.review import ReviewEntity
from ..schemas.session import SessionEntity
from ..schemas.user import UserEntity
from .specs import REVIEWS, SESSIONS, USERS

E = TypeVar("E")

logger = logging.getLogger(__name__)


class DocumentRepository(Generic[E]):
    """Generic CRUD over one collection."""

    def __init__(
        self,
        collection: Collection,
        to_document: Callable[[E], Dict[str, Any]],
        from_document: Callable[[Dict[str, Any]], E],
    ) -> None:
        self.collection = collection
        self._to_document = to_document
        self._from_document = from_document
        self.logger = logging.getLogger(f"{__name__}.{collection.name}")

    def insert(self, entity: E) -> E:
        document = self._to_document(entity)
        try:
            self.collection.insert_one(document)
        except DuplicateKeyError as exc:
            self.logger.info(f"Duplicate key inserting into {self.collection.name}: {exc}")
            raise ConflictException(
                "A record with the same unique fields already exists", code="DUPLICATE"
            ) from exc
        except PyMongoError as exc:
            self.logger.error(f"Error inserting into {self.collection.name}: {exc}")
            raise RepositoryException(f"Failed to insert document: {exc}") from exc
        return self._from_document(document)

    def get_by_id(self, entity_id: str) -> Optional[E]:
        return self.find_one({"_id": adapter.to_ref(entity_id)})

    def find_one(self, criteria: Mapping[str, Any]) -> Optional[E]:
        try:
            document = self.collection.find_one(dict(criteria))
        except PyMongoError as exc:
            self.logger.error(f"Error reading {self.collection.name}: {exc}")
            raise RepositoryException(f"Failed to read document: {exc}") from exc
        return self._from_document(document) if document else None

    def find(
        self,
        criteria: Mapping[str, Any],
        *,
        skip: int = 0,
        limit: int = 0,
        sort: Optional[Sequence[Tuple[str, int]]] = None,
    ) -> List[E]:
        try:
            cursor = self.collection.find(dict(criteria))
            if sort:
                cursor = cursor.sort(list(sort))
            documents = list(cursor.skip(skip).limit(limit))
        except PyMongoError as exc:
            self.logger.error(f"Error querying {self.collection.name}: {exc}")
            raise RepositoryException(f"Failed to query documents: {exc}") from exc
        return [self._from_document(document) for document in documents]

    def count(self, criteria: Mapping[str, Any]) -> int:
        return int(self.collection.count_documents(dict(criteria)))

    def replace(self, entity: E) -> bool:
        """Overwrite the stored document; True when a document was matched."""
        document = self._to_document(entity)
        result = self.collection.replace_one({"_id": document["_id"]}, document)
        return bool(result.matched_count)


class UserDocumentRepository(DocumentRepository[UserEntity]):
    def __init__(self, db: Database) -> None:
        super().__init__(db[USERS.name], adapter.user_to_document, adapter.user_from_document)

    def get_by_email(self, email: str) -> Optional[UserEntity]:
        return self.find_one({"email": email.strip().lower()})


class SessionDocumentRepository(DocumentRepository[SessionEntity]):
    def __init__(self, db: Database) -> None:
        super().__init__(
            db[SESSIONS.name], adapter.session_to_document, adapter.session_from_document
        )

    def for_participant(self, user_id: str) -> List[SessionEntity]:
        ref = adapter.to_ref(user_id)
        return self.find(
            {"$or": [{"candidate": ref}, {"expert": ref}]}, sort=[("scheduledDate", DESCENDING)]
        )


class ReviewDocumentRepository(DocumentRepository[ReviewEntity]):
    def __init__(self, db: Database) -> None:
        super().__init__(db[REVIEWS.name], adapter.review_to_document, adapter.review_from_document)

    def public_for_reviewee(self, user_id: str, *, skip: int = 0, limit: int = 0) -> List[ReviewEntity]:
        return self.find(
            {"reviewee": adapter.to_ref(user_id), "isPublic": True},
            skip=skip,
            limit=limit,
            sort=[("createdAt", DESCENDING)],
        )
