# backend/coachbook/validation/dependencies.py
"""
FastAPI dependencies that run a rule set before the route handler.

Each factory returns a dependency yielding the sanitized payload; a failing
rule set raises `RequestValidationFailed`, rendered as a 400 by
`coachbook.errors`.
"""

from datetime import datetime, timezone
import json
import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import Depends, Request

from ..core.config import settings
from .gate import LoggingDiagnosticSink, NullDiagnosticSink, ValidationGate
from .rule_sets import identifier
from .rules import RuleSet

logger = logging.getLogger(__name__)

_gate = ValidationGate(
    LoggingDiagnosticSink() if settings.log_validation_failures else NullDiagnosticSink()
)


def get_validation_gate() -> ValidationGate:
    return _gate


def get_now() -> datetime:
    """Current instant used by time-dependent rules."""
    return datetime.now(timezone.utc)


async def _read_json_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning(f"Unparseable JSON body on {request.method} {request.url.path}")
        return {}
    return payload if isinstance(payload, dict) else {}


def validated_body(rule_set: RuleSet) -> Callable[..., Awaitable[Dict[str, Any]]]:
    async def dependency(
        request: Request,
        gate: ValidationGate = Depends(get_validation_gate),
        now: datetime = Depends(get_now),
    ) -> Dict[str, Any]:
        payload = await _read_json_body(request)
        return gate.validate(
            rule_set, payload, path=request.url.path, method=request.method, now=now
        )

    return dependency


def validated_query(rule_set: RuleSet) -> Callable[..., Awaitable[Dict[str, Any]]]:
    async def dependency(
        request: Request,
        gate: ValidationGate = Depends(get_validation_gate),
    ) -> Dict[str, Any]:
        return gate.validate(
            rule_set,
            dict(request.query_params),
            path=request.url.path,
            method=request.method,
        )

    return dependency


def validated_id(name: str) -> Callable[..., Awaitable[str]]:
    """Dependency returning path parameter `name` once it is a valid identifier."""
    rule_set = identifier(name)

    async def dependency(
        request: Request,
        gate: ValidationGate = Depends(get_validation_gate),
    ) -> str:
        data = gate.validate(
            rule_set,
            dict(request.path_params),
            path=request.url.path,
            method=request.method,
        )
        return str(data[name])

    return dependency
