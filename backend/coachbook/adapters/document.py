# backend/coachbook/adapters/document.py
"""
Canonical entity <-> MongoDB document mapping.

Documents keep the legacy shape: camelCase keys, the profile embedded in the
user, references named after the related entity (`candidate`, `expert`,
`session`, ...). Ids in the 24-hex format become real ObjectIds; relational
ids are stored as plain strings so migrated rows keep their identity.
"""

from typing import Any, Dict, Optional

from bson import ObjectId

from ..core.enums import UserRole, enum_values
from ..core.exceptions import DocumentSchemaException
from ..core.ids import generate_object_id, is_object_id
from ..schemas.review import ReviewEntity
from ..schemas.session import SessionEntity
from ..schemas.user import UserEntity

_ENTITY_KEYS = {"id", "created_at", "updated_at"}


def to_ref(value: Optional[str]) -> Any:
    """Document reference for an id string."""
    if value is None:
        return None
    return ObjectId(value) if is_object_id(value) else value


def from_ref(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _new_document(entity_id: Optional[str]) -> Dict[str, Any]:
    return {"_id": to_ref(entity_id or generate_object_id())}


def _timestamps(entity: Any) -> Dict[str, Any]:
    return {"createdAt": entity.created_at, "updatedAt": entity.updated_at}


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


def user_to_document(entity: UserEntity) -> Dict[str, Any]:
    """
    Raises:
        DocumentSchemaException: for roles the document schema cannot hold.
    """
    if entity.role not in enum_values(UserRole):
        raise DocumentSchemaException(
            f"Role '{entity.role}' cannot be stored on the document backend",
            code="UNSUPPORTED_ROLE",
        )
    document = _new_document(entity.id)
    document.update(
        entity.model_dump(by_alias=True, exclude=_ENTITY_KEYS | {"password_hash"})
    )
    document["password"] = entity.password_hash
    document.update(_timestamps(entity))
    return document


def user_from_document(document: Dict[str, Any]) -> UserEntity:
    data = dict(document)
    data["id"] = from_ref(data.pop("_id", None))
    data["passwordHash"] = data.pop("password", None)
    return UserEntity.model_validate(data)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


def session_to_document(entity: SessionEntity) -> Dict[str, Any]:
    document = _new_document(entity.id)
    body = entity.model_dump(by_alias=True, exclude=_ENTITY_KEYS | {"candidate_id", "expert_id"})
    for attachment in body.get("attachments", []):
        attachment["uploadedBy"] = to_ref(attachment.get("uploadedBy"))
    document.update(body)
    document["candidate"] = to_ref(entity.candidate_id)
    document["expert"] = to_ref(entity.expert_id)
    document.update(_timestamps(entity))
    return document


def session_from_document(document: Dict[str, Any]) -> SessionEntity:
    data = dict(document)
    data["id"] = from_ref(data.pop("_id", None))
    data["candidateId"] = from_ref(data.pop("candidate", None))
    data["expertId"] = from_ref(data.pop("expert", None))
    data["attachments"] = [
        {**item, "uploadedBy": from_ref(item.get("uploadedBy"))}
        for item in data.get("attachments", [])
    ]
    return SessionEntity.model_validate(data)


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------


def review_to_document(entity: ReviewEntity) -> Dict[str, Any]:
    document = _new_document(entity.id)
    body = entity.model_dump(
        by_alias=True, exclude=_ENTITY_KEYS | {"session_id", "reviewer_id", "reviewee_id"}
    )
    body["categories"] = entity.categories.present()
    document.update(body)
    document["session"] = to_ref(entity.session_id)
    document["reviewer"] = to_ref(entity.reviewer_id)
    document["reviewee"] = to_ref(entity.reviewee_id)
    document.update(_timestamps(entity))
    return document


def review_from_document(document: Dict[str, Any]) -> ReviewEntity:
    data = dict(document)
    data["id"] = from_ref(data.pop("_id", None))
    data["sessionId"] = from_ref(data.pop("session", None))
    data["reviewerId"] = from_ref(data.pop("reviewer", None))
    data["revieweeId"] = from_ref(data.pop("reviewee", None))
    return ReviewEntity.model_validate(data)
