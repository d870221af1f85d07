# backend/coachbook/validation/rules.py
"""
Declarative request validation.

A `FieldRule` is an ordered chain of checks and sanitizers for one field path
(dotted paths address nested objects, e.g. ``profile.bio``). A `RuleSet` runs
every rule against a copy of the payload and collects every failure; nothing
short-circuits inside a set. Deciding what to do with the failures is the
gate's job (see `coachbook.validation.gate`).

Value handling follows the loose string semantics HTML forms and JSON
clients expect: numbers are checked through their text form, so ``"30"`` and
``30`` are both a valid integer, while ``true`` and ``30.5`` are not.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
import re
from typing import Any, Callable, Iterable, Mapping, Optional, Pattern, Sequence

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

DEFAULT_MESSAGE = "Invalid value"

_INT_RE = re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$")
_FLOAT_RE = re.compile(r"^[-+]?(?:[0-9]+)?(?:\.[0-9]*)?(?:[eE][-+]?[0-9]+)?$")
_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


class _Missing:
    """Marker for a field absent from the payload (distinct from an explicit null)."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class FieldError:
    """One failed check: the field path and a human-readable message."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationContext:
    """Read-only inputs shared by every rule of one evaluation."""

    payload: Mapping[str, Any]
    now: datetime


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one rule-set evaluation."""

    errors: tuple[FieldError, ...]
    data: dict[str, Any]

    @property
    def is_valid(self) -> bool:
        return not self.errors


Check = Callable[[Any, ValidationContext], bool]
Sanitizer = Callable[[Any], Any]


@dataclass(frozen=True)
class _Step:
    check: Optional[Check] = None
    sanitizer: Optional[Sanitizer] = None
    message: str = DEFAULT_MESSAGE
    # Sanitizers that coerce types only run while the field is still error-free
    needs_clean: bool = False


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def as_text(value: Any) -> Optional[str]:
    """
    Text form of a scalar, or None when the value has no sensible text form.

    Absent and null values read as the empty string.
    """
    if value is MISSING or value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return None


def parse_iso8601(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are read as UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = as_text(value)
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_int_text(text: Optional[str]) -> bool:
    return bool(text) and _INT_RE.match(text) is not None  # type: ignore[arg-type]


def _is_float_text(text: Optional[str]) -> bool:
    if not text or text in {".", "-", "+"}:
        return False
    return _FLOAT_RE.match(text) is not None


def _get_path(data: Mapping[str, Any], path: Sequence[str]) -> Any:
    current: Any = data
    for part in path:
        if not isinstance(current, Mapping) or part not in current:
            return MISSING
        current = current[part]
    return current


def _set_path(data: dict[str, Any], path: Sequence[str], value: Any) -> None:
    current: Any = data
    for part in path[:-1]:
        current = current.get(part) if isinstance(current, dict) else None
        if not isinstance(current, dict):
            return
    if isinstance(current, dict):
        current[path[-1]] = value


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class FieldRule:
    """
    Ordered chain of checks and sanitizers for a single field.

    Every failing check adds its own error, so one field can report several
    problems at once (e.g. a password that is both too short and too weak).
    """

    def __init__(self, path: str) -> None:
        self.field = path
        self._path = tuple(path.split(".")) if path else ()
        self._steps: list[_Step] = []
        self._optional = False

    def __repr__(self) -> str:
        return f"<FieldRule {self.field!r} steps={len(self._steps)}>"

    # -- chain modifiers ---------------------------------------------------

    def optional(self) -> "FieldRule":
        """Skip the whole chain when the field is absent."""
        self._optional = True
        return self

    def _check(self, check: Check, message: str) -> "FieldRule":
        self._steps.append(_Step(check=check, message=message))
        return self

    def _sanitize(self, sanitizer: Sanitizer, *, needs_clean: bool = False) -> "FieldRule":
        self._steps.append(_Step(sanitizer=sanitizer, needs_clean=needs_clean))
        return self

    # -- sanitizers ---------------------------------------------------------

    def trim(self) -> "FieldRule":
        return self._sanitize(lambda v: v.strip() if isinstance(v, str) else v)

    def normalize_email(self) -> "FieldRule":
        return self._sanitize(lambda v: v.strip().lower() if isinstance(v, str) else v)

    def to_int(self) -> "FieldRule":
        return self._sanitize(lambda v: int(as_text(v) or 0), needs_clean=True)

    def to_float(self) -> "FieldRule":
        return self._sanitize(lambda v: float(as_text(v) or 0), needs_clean=True)

    # -- checks -------------------------------------------------------------

    def is_length(
        self,
        min: Optional[int] = None,
        max: Optional[int] = None,
        *,
        message: str = DEFAULT_MESSAGE,
    ) -> "FieldRule":
        def check(value: Any, _ctx: ValidationContext) -> bool:
            text = as_text(value)
            if text is None:
                return False
            if min is not None and len(text) < min:
                return False
            return max is None or len(text) <= max

        return self._check(check, message)

    def not_empty(self, *, message: str = DEFAULT_MESSAGE) -> "FieldRule":
        return self._check(lambda v, _ctx: bool(as_text(v)), message)

    def is_string(self, *, message: str = DEFAULT_MESSAGE) -> "FieldRule":
        return self._check(lambda v, _ctx: isinstance(v, str), message)

    def is_email(self, *, message: str = DEFAULT_MESSAGE) -> "FieldRule":
        def check(value: Any, _ctx: ValidationContext) -> bool:
            if not isinstance(value, str) or not value:
                return False
            try:
                _EMAIL_ADAPTER.validate_python(value)
            except PydanticValidationError:
                return False
            return True

        return self._check(check, message)

    def matches(self, pattern: Pattern[str], *, message: str = DEFAULT_MESSAGE) -> "FieldRule":
        def check(value: Any, _ctx: ValidationContext) -> bool:
            text = as_text(value)
            return text is not None and pattern.search(text) is not None

        return self._check(check, message)

    def is_in(self, allowed: Iterable[str], *, message: str = DEFAULT_MESSAGE) -> "FieldRule":
        choices = frozenset(allowed)
        return self._check(lambda v, _ctx: as_text(v) in choices, message)

    def is_int(
        self,
        min: Optional[int] = None,
        max: Optional[int] = None,
        *,
        message: str = DEFAULT_MESSAGE,
    ) -> "FieldRule":
        def check(value: Any, _ctx: ValidationContext) -> bool:
            text = as_text(value)
            if not _is_int_text(text):
                return False
            number = int(text)  # type: ignore[arg-type]
            if min is not None and number < min:
                return False
            return max is None or number <= max

        return self._check(check, message)

    def is_float(
        self,
        min: Optional[float] = None,
        max: Optional[float] = None,
        *,
        message: str = DEFAULT_MESSAGE,
    ) -> "FieldRule":
        def check(value: Any, _ctx: ValidationContext) -> bool:
            text = as_text(value)
            if not _is_float_text(text):
                return False
            number = float(text)  # type: ignore[arg-type]
            if min is not None and number < min:
                return False
            return max is None or number <= max

        return self._check(check, message)

    def is_list(self, max_items: Optional[int] = None, *, message: str = DEFAULT_MESSAGE) -> "FieldRule":
        def check(value: Any, _ctx: ValidationContext) -> bool:
            if not isinstance(value, list):
                return False
            return max_items is None or len(value) <= max_items

        return self._check(check, message)

    def is_iso8601(self, *, message: str = DEFAULT_MESSAGE) -> "FieldRule":
        return self._check(lambda v, _ctx: parse_iso8601(v) is not None, message)

    def custom(self, check: Check, *, message: str = DEFAULT_MESSAGE) -> "FieldRule":
        """Attach an arbitrary predicate; it receives the value and the evaluation context."""
        return self._check(check, message)

    # -- evaluation ---------------------------------------------------------

    def run(self, data: dict[str, Any], context: ValidationContext) -> list[FieldError]:
        """Run the chain against `data`, writing sanitized values back into it."""
        value = _get_path(data, self._path) if self._path else data
        if self._optional and value is MISSING:
            return []

        errors: list[FieldError] = []
        for step in self._steps:
            if step.sanitizer is not None:
                if step.needs_clean and errors:
                    continue
                if value is MISSING:
                    continue
                value = step.sanitizer(value)
                if self._path:
                    _set_path(data, self._path, value)
                continue
            if step.check is not None and not step.check(value, context):
                errors.append(FieldError(self.field, step.message))
        return errors


def body(path: str) -> FieldRule:
    """Start a rule for a request body field."""
    return FieldRule(path)


def param(name: str) -> FieldRule:
    """Start a rule for a path parameter."""
    return FieldRule(name)


def query(name: str) -> FieldRule:
    """Start a rule for a query-string parameter."""
    return FieldRule(name)


@dataclass
class CrossFieldRule:
    """
    Predicate over the whole payload, reported against one field.

    Used for constraints no single field can decide on its own.
    """

    field: str
    check: Callable[[Mapping[str, Any], ValidationContext], bool]
    message: str = DEFAULT_MESSAGE

    def run(self, data: dict[str, Any], context: ValidationContext) -> list[FieldError]:
        if self.check(data, context):
            return []
        return [FieldError(self.field, self.message)]


@dataclass
class RuleSet:
    """Named, ordered collection of rules applied to one request type."""

    name: str
    rules: list[FieldRule | CrossFieldRule] = field(default_factory=list)

    def evaluate(
        self,
        payload: Optional[Mapping[str, Any]],
        *,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        """
        Run every rule and collect every failure.

        The caller's payload is never modified; sanitized values are written
        to a deep copy returned as `ValidationResult.data`.
        """
        data: dict[str, Any] = copy.deepcopy(dict(payload)) if isinstance(payload, Mapping) else {}
        context = ValidationContext(payload=data, now=now or datetime.now(timezone.utc))
        errors: list[FieldError] = []
        for rule in self.rules:
            errors.extend(rule.run(data, context))
        return ValidationResult(errors=tuple(errors), data=data)
