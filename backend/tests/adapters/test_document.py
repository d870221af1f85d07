from datetime import datetime, timezone

from bson import ObjectId
import pytest

from coachbook.adapters.document import (
    review_from_document,
    review_to_document,
    session_from_document,
    session_to_document,
    to_ref,
    user_from_document,
    user_to_document,
)
from coachbook.core.exceptions import DocumentSchemaException
from coachbook.schemas.review import ReviewCategories, ReviewEntity
from coachbook.schemas.session import Attachment, SessionEntity
from coachbook.schemas.user import UserEntity, UserProfile

HEX_ID = "507f1f77bcf86cd799439011"
OTHER_HEX_ID = "507f1f77bcf86cd799439012"
ULID_ID = "01HZX3J5K8M9N2P4Q6R7S8T9VW"


def make_user(**overrides):
    values = dict(
        id=HEX_ID,
        name="Erin Expert",
        email="erin@example.com",
        password_hash="$2b$12$abcdefghijklmnopqrstuuJ3V5l7m0Ih0n3o3v1Wc1z8mXo5Zt6wK",
        role="expert",
        profile=UserProfile(bio="Staff engineer", hourly_rate=120, skills=["go"]),
    )
    values.update(overrides)
    return UserEntity(**values)


def test_to_ref():
    assert to_ref(HEX_ID) == ObjectId(HEX_ID)
    assert to_ref(ULID_ID) == ULID_ID
    assert to_ref(None) is None


def test_user_document_shape():
    entity = make_user()

    document = user_to_document(entity)

    assert document["_id"] == ObjectId(HEX_ID)
    assert document["password"] == entity.password_hash
    assert "passwordHash" not in document
    assert "id" not in document
    assert document["role"] == "expert"
    assert document["profile"]["hourlyRate"] == 120
    assert document["profile"]["availability"]["workingHoursEnd"] == "17:00"


def test_user_document_roundtrip():
    entity = make_user()

    assert user_from_document(user_to_document(entity)) == entity


def test_new_user_gets_an_object_id():
    document = user_to_document(make_user(id=None))

    assert isinstance(document["_id"], ObjectId)


def test_admin_cannot_be_stored_as_a_document():
    with pytest.raises(DocumentSchemaException):
        user_to_document(make_user(role="admin"))


def test_session_document_references():
    entity = SessionEntity(
        id=HEX_ID,
        candidate_id=OTHER_HEX_ID,
        expert_id=ULID_ID,
        title="Mock interview",
        description="Practice system design questions",
        scheduled_date=datetime(2030, 2, 1, 10, tzinfo=timezone.utc),
        session_type="mock-interview",
        attachments=[Attachment(name="cv.pdf", url="/cv.pdf", uploaded_by=OTHER_HEX_ID)],
    )

    document = session_to_document(entity)

    assert document["candidate"] == ObjectId(OTHER_HEX_ID)
    assert document["expert"] == ULID_ID
    assert document["attachments"][0]["uploadedBy"] == ObjectId(OTHER_HEX_ID)
    assert document["status"] == "pending"
    assert "candidateId" not in document
    assert session_from_document(document) == entity


def test_review_document_keeps_only_given_categories():
    entity = ReviewEntity(
        session_id=HEX_ID,
        reviewer_id=OTHER_HEX_ID,
        reviewee_id=ULID_ID,
        rating=5,
        comment="Excellent",
        categories=ReviewCategories(communication=5),
    )

    document = review_to_document(entity)

    assert document["categories"] == {"communication": 5}
    assert document["session"] == ObjectId(HEX_ID)
    restored = review_from_document(document)
    assert restored.id == str(document["_id"])
    assert restored.categories == entity.categories
