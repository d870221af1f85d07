from datetime import timedelta

import pytest

from coachbook.adapters.relational import (
    review_from_row,
    review_row_values,
    session_from_row,
    session_row_values,
    user_from_row,
    user_row_values,
)
from coachbook.core.enums import VerificationDocumentType
from coachbook.models import CoachingSession, Review, User
from coachbook.schemas.user import VerificationDocument

from ..conftest import FIXED_NOW


def test_user_row_to_entity(test_expert):
    entity = user_from_row(test_expert)

    assert entity.id == test_expert.id
    assert entity.role == "expert"
    assert entity.is_expert
    assert entity.profile.hourly_rate == 90
    assert entity.profile.skills == ["python", "system design"]
    assert entity.profile.availability.working_hours_start == "09:00"
    assert entity.password_hash == test_expert.hashed_password
    assert entity.created_at.tzinfo is not None


def test_public_dict_is_camel_case_and_never_carries_the_password(test_expert):
    data = user_from_row(test_expert).public_dict()

    assert "password" not in data
    assert "passwordHash" not in data
    assert data["isActive"] is True
    assert data["profile"]["hourlyRate"] == 90
    assert data["profile"]["availability"]["daysAvailable"][0] == "monday"


def test_verification_documents_map_to_path_columns(db, test_expert):
    test_expert.resume_path = "/files/resume.pdf"
    test_expert.certification_paths = ["/files/aws.pdf"]
    db.commit()

    documents = user_from_row(test_expert).profile.verification_documents

    assert [(d.type, d.url) for d in documents] == [
        ("resume", "/files/resume.pdf"),
        ("certificate", "/files/aws.pdf"),
    ]


def test_entity_to_row_values(db, test_expert):
    entity = user_from_row(test_expert)
    entity.profile.verification_documents = [
        VerificationDocument(type=VerificationDocumentType.RESUME, url="/r.pdf"),
        VerificationDocument(type=VerificationDocumentType.PORTFOLIO, url="/p.pdf"),
    ]
    entity.email = "copy@example.com"
    entity.id = None

    values = user_row_values(entity)
    copy = User(**values)
    db.add(copy)
    db.commit()

    assert "id" not in values
    assert copy.user_type == "expert"
    assert copy.hourly_rate == 90
    assert copy.resume_path == "/r.pdf"
    assert copy.certification_paths == []
    assert copy.check_password("Secret123")


def test_row_values_reject_plaintext_password(test_expert):
    entity = user_from_row(test_expert)
    entity.password_hash = "Secret123"

    with pytest.raises(ValueError, match="not a bcrypt hash"):
        user_row_values(entity)


def test_session_roundtrip(db, test_candidate, test_expert):
    row = CoachingSession(
        candidate_id=test_candidate.id,
        expert_id=test_expert.id,
        title="Resume review",
        description="Walk through my resume",
        scheduled_date=FIXED_NOW + timedelta(days=1),
        session_type="resume-review",
        price=45,
        attachments=[{"name": "cv.pdf", "url": "/cv.pdf", "uploadedBy": test_candidate.id}],
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    entity = session_from_row(row)

    assert entity.duration == 60
    assert entity.status == "pending"
    assert entity.scheduled_date == FIXED_NOW + timedelta(days=1)
    assert entity.attachments[0].uploaded_by == test_candidate.id
    assert entity.feedback.candidate.rating is None

    values = session_row_values(entity)
    assert values["id"] == row.id
    assert values["attachments"][0]["uploadedBy"] == test_candidate.id
    assert values["candidate_notes"] == ""


def test_review_roundtrip(db, test_candidate, test_expert):
    session = CoachingSession(
        candidate_id=test_candidate.id,
        expert_id=test_expert.id,
        title="Mock interview",
        description="Practice system design questions",
        scheduled_date=FIXED_NOW,
        session_type="mock-interview",
    )
    db.add(session)
    db.flush()
    row = Review(
        session_id=session.id,
        reviewer_id=test_candidate.id,
        reviewee_id=test_expert.id,
        rating=4,
        comment="Helpful",
        categories={"expertise": 5},
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    entity = review_from_row(row)

    assert entity.categories.expertise == 5
    assert entity.categories.punctuality is None
    assert entity.is_public is True
    assert review_row_values(entity)["categories"] == {"expertise": 5}
