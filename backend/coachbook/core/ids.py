# backend/coachbook/core/ids.py
"""
Identifier formats accepted at the API boundary.

Two shapes are live at the same time while data moves between backends:

- legacy document ids: 24 hexadecimal characters (MongoDB ObjectId)
- relational ids: alphanumeric, 10 to 50 characters (ULIDs for new rows)
"""

from typing import Any

from bson import ObjectId
import ulid

from .constants import (
    OBJECT_ID_PATTERN,
    RELATIONAL_ID_MAX_LENGTH,
    RELATIONAL_ID_MIN_LENGTH,
    RELATIONAL_ID_PATTERN,
)


def is_object_id(value: Any) -> bool:
    """Check for the legacy 24-hex-character document id."""
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def is_relational_id(value: Any) -> bool:
    """Check for an alphanumeric relational id of accepted length."""
    if not isinstance(value, str):
        return False
    if not RELATIONAL_ID_MIN_LENGTH <= len(value) <= RELATIONAL_ID_MAX_LENGTH:
        return False
    return RELATIONAL_ID_PATTERN.fullmatch(value) is not None


def is_valid_identifier(value: Any) -> bool:
    """True when the value is in either accepted identifier format."""
    return is_object_id(value) or is_relational_id(value)


def generate_ulid() -> str:
    """Generate a new ULID string for relational primary keys."""
    return str(ulid.ULID())


def generate_object_id() -> str:
    """Generate a new document id as its 24-character hex string."""
    return str(ObjectId())
