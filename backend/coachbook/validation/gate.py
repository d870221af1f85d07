# backend/coachbook/validation/gate.py
"""
Validation gate: the single accept/reject decision for a request.

Rule sets only collect failures. The gate looks at the collected list once,
reports it to a diagnostic sink and raises `RequestValidationFailed` carrying
every failure, so clients see all problems of a request in one response.
"""

from datetime import datetime
import logging
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.exceptions import RequestValidationFailed
from .rules import FieldError, RuleSet, ValidationResult

logger = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    """Receives a record of every rejected request."""

    def record(self, *, path: str, method: str, errors: Sequence[FieldError]) -> None:
        ...


class LoggingDiagnosticSink:
    """Writes rejected requests to the operational log."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def record(self, *, path: str, method: str, errors: Sequence[FieldError]) -> None:
        self.log.error(
            "Validation errors: %s %s %s",
            method,
            path,
            [error.to_dict() for error in errors],
        )


class NullDiagnosticSink:
    """Discards records."""

    def record(self, *, path: str, method: str, errors: Sequence[FieldError]) -> None:
        return None


class ValidationGate:
    """Evaluates a rule set and rejects the request when anything failed."""

    def __init__(self, sink: Optional[DiagnosticSink] = None) -> None:
        self.sink: DiagnosticSink = sink if sink is not None else LoggingDiagnosticSink()

    def enforce(self, result: ValidationResult, *, path: str = "", method: str = "") -> dict[str, Any]:
        """
        Accept or reject an already evaluated result.

        Returns:
            The sanitized payload when no rule failed.

        Raises:
            RequestValidationFailed: with the full ordered error list.
        """
        if result.errors:
            self.sink.record(path=path, method=method, errors=result.errors)
            raise RequestValidationFailed(result.errors)
        return result.data

    def validate(
        self,
        rule_set: RuleSet,
        payload: Optional[Mapping[str, Any]],
        *,
        path: str = "",
        method: str = "",
        now: Optional[datetime] = None,
    ) -> dict[str, Any]:
        """Evaluate `rule_set` against `payload` and enforce the outcome."""
        result = rule_set.evaluate(payload, now=now)
        return self.enforce(result, path=path, method=method)
