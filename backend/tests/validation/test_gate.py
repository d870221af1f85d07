import logging

import pytest

from coachbook.core.exceptions import RequestValidationFailed
from coachbook.validation.gate import LoggingDiagnosticSink, NullDiagnosticSink, ValidationGate
from coachbook.validation.rule_sets import LOGIN


class RecordingSink:
    def __init__(self):
        self.records = []

    def record(self, *, path, method, errors):
        self.records.append((path, method, list(errors)))


def test_valid_payload_passes_through_sanitized():
    sink = RecordingSink()
    gate = ValidationGate(sink)

    data = gate.validate(LOGIN, {"email": " A@B.com ", "password": "x"}, path="/login", method="POST")

    assert data == {"email": "a@b.com", "password": "x"}
    assert sink.records == []


def test_rejection_carries_every_error_and_is_recorded_once():
    sink = RecordingSink()
    gate = ValidationGate(sink)

    with pytest.raises(RequestValidationFailed) as exc_info:
        gate.validate(LOGIN, {}, path="/api/v1/auth/login", method="POST")

    exc = exc_info.value
    assert exc.message == "Validation failed"
    assert exc.status_code == 400
    assert exc.error_list() == [
        {"field": "email", "message": "Valid email is required"},
        {"field": "password", "message": "Password is required"},
    ]
    assert len(sink.records) == 1
    path, method, errors = sink.records[0]
    assert (path, method) == ("/api/v1/auth/login", "POST")
    assert errors == exc.errors


def test_logging_sink_writes_an_error_record(caplog):
    gate = ValidationGate(LoggingDiagnosticSink())

    with caplog.at_level(logging.ERROR, logger="coachbook.validation.gate"):
        with pytest.raises(RequestValidationFailed):
            gate.validate(LOGIN, {"email": "x"}, path="/login", method="POST")

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    assert "Validation errors" in record.getMessage()
    assert "/login" in record.getMessage()


def test_null_sink_is_silent(caplog):
    gate = ValidationGate(NullDiagnosticSink())

    with caplog.at_level(logging.DEBUG):
        with pytest.raises(RequestValidationFailed):
            gate.validate(LOGIN, {}, path="/login", method="POST")

    assert not [r for r in caplog.records if r.name.startswith("coachbook.validation")]


def test_default_sink_logs():
    assert isinstance(ValidationGate().sink, LoggingDiagnosticSink)
