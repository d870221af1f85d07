from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from coachbook.core.exceptions import (
    ConflictException,
    InvalidStatusTransitionException,
    NotFoundException,
    RequestValidationFailed,
)
from coachbook.errors import register_error_handlers
from coachbook.validation.rules import FieldError


def test_default_code_is_class_name():
    assert NotFoundException("missing").code == "NotFoundException"


def test_conflict_status():
    assert ConflictException("taken", code="EMAIL_EXISTS").status_code == 409


def test_transition_details():
    exc = InvalidStatusTransitionException("completed", "pending")

    assert exc.status_code == 422
    assert exc.details == {"current_status": "completed", "requested_status": "pending"}


def test_request_validation_failed_keeps_order():
    exc = RequestValidationFailed([FieldError("b", "second"), FieldError("a", "first")])

    assert exc.error_list() == [
        {"field": "b", "message": "second"},
        {"field": "a", "message": "first"},
    ]


def test_http_exception_envelope():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/taken")
    def taken():
        raise HTTPException(status_code=409, detail={"message": "Already there", "code": "TAKEN"})

    response = TestClient(app).get("/taken")

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "Already there", "code": "TAKEN"}
