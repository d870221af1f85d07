# backend/coachbook/documents/specs.py
"""
MongoDB collection definitions: `$jsonSchema` validators and indexes.

Bounds are read from the shared constraint table, so the document backend
enforces the same limits as the relational CHECK constraints.
"""

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.database import Database

from ..core import constants as c
from ..core.enums import (
    PaymentStatus,
    ReminderChannel,
    ReminderStatus,
    ReviewCategory,
    SessionStatus,
    SessionType,
    UserRole,
    VerificationDocumentType,
    Weekday,
    enum_values,
)

logger = logging.getLogger(__name__)

_NUMBER = ["int", "long", "double", "decimal"]
_ID = ["objectId", "string"]


def _string(min_length: Optional[int] = None, max_length: Optional[int] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"bsonType": "string"}
    if min_length is not None:
        schema["minLength"] = min_length
    if max_length is not None:
        schema["maxLength"] = max_length
    return schema


def _number(minimum: Optional[float] = None, maximum: Optional[float] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"bsonType": _NUMBER}
    if minimum is not None:
        schema["minimum"] = minimum
    if maximum is not None:
        schema["maximum"] = maximum
    return schema


def _optional(schema: Dict[str, Any]) -> Dict[str, Any]:
    bson_type = schema["bsonType"]
    types = bson_type if isinstance(bson_type, list) else [bson_type]
    return {**schema, "bsonType": [*types, "null"]}


def _enum(enum_class: type[Enum]) -> Dict[str, Any]:
    return {"enum": enum_values(enum_class)}


def _object(properties: Dict[str, Any], required: Optional[List[str]] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"bsonType": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _timestamps() -> Dict[str, Any]:
    return {"createdAt": {"bsonType": ["date", "null"]}, "updatedAt": {"bsonType": ["date", "null"]}}


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    schema: Dict[str, Any]
    indexes: List[IndexModel] = field(default_factory=list)

    @property
    def validator(self) -> Dict[str, Any]:
        return {"$jsonSchema": self.schema}


_rating = _number(c.RATING_MIN, c.RATING_MAX)

USERS = CollectionSpec(
    name="users",
    schema=_object(
        {
            "name": _string(c.NAME_MIN_LENGTH, c.NAME_MAX_LENGTH),
            "email": _string(),
            "password": _string(),
            "role": _enum(UserRole),
            "profile": _object(
                {
                    "bio": _string(max_length=c.BIO_MAX_LENGTH),
                    "experience": _string(max_length=c.EXPERIENCE_MAX_LENGTH),
                    "skills": {
                        "bsonType": "array",
                        "maxItems": c.SKILLS_MAX_COUNT,
                        "items": {"bsonType": "string"},
                    },
                    "rating": _number(c.PROFILE_RATING_MIN, c.PROFILE_RATING_MAX),
                    "totalSessions": _number(c.TOTAL_SESSIONS_MIN),
                    "hourlyRate": _number(c.HOURLY_RATE_MIN),
                    "availability": _object(
                        {
                            "timezone": _string(),
                            "workingHoursStart": _string(),
                            "workingHoursEnd": _string(),
                            "daysAvailable": {"bsonType": "array", "items": _enum(Weekday)},
                        }
                    ),
                    "isVerified": {"bsonType": "bool"},
                    "verificationDocuments": {
                        "bsonType": "array",
                        "items": _object({"type": _enum(VerificationDocumentType)}),
                    },
                }
            ),
            "isActive": {"bsonType": "bool"},
            **_timestamps(),
        },
        required=["name", "email", "password", "role"],
    ),
    indexes=[IndexModel([("email", ASCENDING)], unique=True, name="uq_users_email")],
)

SESSIONS = CollectionSpec(
    name="sessions",
    schema=_object(
        {
            "candidate": {"bsonType": _ID},
            "expert": {"bsonType": _ID},
            "title": _string(c.TITLE_MIN_LENGTH, c.TITLE_MAX_LENGTH),
            "description": _string(c.DESCRIPTION_MIN_LENGTH, c.DESCRIPTION_MAX_LENGTH),
            "scheduledDate": {"bsonType": "date"},
            "duration": _number(c.DURATION_MIN_MINUTES, c.DURATION_MAX_MINUTES),
            "status": _enum(SessionStatus),
            "sessionType": _enum(SessionType),
            "price": _number(c.PRICE_MIN),
            "paymentStatus": _enum(PaymentStatus),
            "notes": _object(
                {
                    "candidate": _string(max_length=c.SESSION_NOTE_MAX_LENGTH),
                    "expert": _string(max_length=c.SESSION_NOTE_MAX_LENGTH),
                }
            ),
            "feedback": _object(
                {
                    side: _object(
                        {
                            "rating": _optional(_rating),
                            "comment": _optional(
                                _string(max_length=c.FEEDBACK_COMMENT_MAX_LENGTH)
                            ),
                        }
                    )
                    for side in ("candidate", "expert")
                }
            ),
            "reminders": {
                "bsonType": "array",
                "items": _object({"type": _enum(ReminderChannel), "status": _enum(ReminderStatus)}),
            },
            **_timestamps(),
        },
        required=[
            "candidate",
            "expert",
            "title",
            "description",
            "scheduledDate",
            "duration",
            "sessionType",
            "price",
        ],
    ),
    indexes=[
        IndexModel([("candidate", ASCENDING), ("scheduledDate", ASCENDING)]),
        IndexModel([("expert", ASCENDING), ("scheduledDate", ASCENDING)]),
        IndexModel([("status", ASCENDING)]),
        IndexModel([("scheduledDate", ASCENDING)]),
    ],
)

REVIEWS = CollectionSpec(
    name="reviews",
    schema=_object(
        {
            "session": {"bsonType": _ID},
            "reviewer": {"bsonType": _ID},
            "reviewee": {"bsonType": _ID},
            "rating": _rating,
            "comment": _string(c.COMMENT_MIN_LENGTH, c.COMMENT_MAX_LENGTH),
            "categories": _object({category.value: _rating for category in ReviewCategory}),
            "isVerified": {"bsonType": "bool"},
            "isPublic": {"bsonType": "bool"},
            "helpfulVotes": _number(c.HELPFUL_VOTES_MIN),
            **_timestamps(),
        },
        required=["session", "reviewer", "reviewee", "rating", "comment"],
    ),
    indexes=[
        IndexModel([("reviewee", ASCENDING), ("createdAt", DESCENDING)]),
        IndexModel([("reviewer", ASCENDING)]),
        IndexModel([("session", ASCENDING)], unique=True, name="uq_reviews_session"),
        IndexModel(
            [("session", ASCENDING), ("reviewer", ASCENDING)],
            unique=True,
            name="uq_reviews_session_reviewer",
        ),
    ],
)

COLLECTIONS: List[CollectionSpec] = [USERS, SESSIONS, REVIEWS]


def ensure_collections(db: Database) -> None:
    """Create or update every collection's validator, then its indexes."""
    existing = set(db.list_collection_names())
    for spec in COLLECTIONS:
        if spec.name in existing:
            db.command("collMod", spec.name, validator=spec.validator)
        else:
            db.create_collection(spec.name, validator=spec.validator)
        if spec.indexes:
            db[spec.name].create_indexes(spec.indexes)
        logger.info(f"Collection '{spec.name}' verified")
