# backend/coachbook/validation/rule_sets.py
"""
Rule sets for every validated endpoint.

Limits come from `coachbook.core.constants` so these rules cannot drift from
the relational and document schemas.
"""

from typing import Any, Mapping

from ..core import constants as c
from ..core.enums import ReviewCategory, SessionStatus, SessionType, UserRole, UserType, enum_values
from ..core.ids import is_valid_identifier
from ..utils.helpers import is_future_date
from .rules import MISSING, CrossFieldRule, RuleSet, ValidationContext, body, param, parse_iso8601, query

ROLE_REQUIRED_MESSAGE = "Either userType or role must be provided"
ROLE_MISMATCH_MESSAGE = "Role and userType must match when both are provided"
FUTURE_DATE_MESSAGE = "Scheduled date must be in the future"


def _has_role_or_user_type(payload: Mapping[str, Any], _ctx: ValidationContext) -> bool:
    return bool(payload.get("userType")) or bool(payload.get("role"))


def _role_agrees_with_user_type(payload: Mapping[str, Any], _ctx: ValidationContext) -> bool:
    user_type = payload.get("userType")
    role = payload.get("role")
    # Only compare two otherwise valid values; enum errors are reported by the field rules
    if user_type not in enum_values(UserType) or role not in enum_values(UserRole):
        return True
    return user_type == role


def _is_in_future(value: Any, ctx: ValidationContext) -> bool:
    if value is MISSING:
        return True
    scheduled = parse_iso8601(value)
    if scheduled is None:
        # Unparseable dates are reported by the ISO-8601 check
        return True
    return is_future_date(scheduled, ctx.now)


def _is_identifier(value: Any, _ctx: ValidationContext) -> bool:
    return is_valid_identifier(value)


def _is_object(value: Any, _ctx: ValidationContext) -> bool:
    return isinstance(value, Mapping)


REGISTRATION = RuleSet(
    "registration",
    [
        body("name")
        .trim()
        .is_length(
            c.NAME_MIN_LENGTH,
            c.NAME_MAX_LENGTH,
            message=f"Name must be between {c.NAME_MIN_LENGTH} and {c.NAME_MAX_LENGTH} characters",
        ),
        body("email").trim().is_email(message="Valid email is required").normalize_email(),
        body("password")
        .is_length(
            c.PASSWORD_MIN_LENGTH,
            message=f"Password must be at least {c.PASSWORD_MIN_LENGTH} characters",
        )
        .matches(
            c.PASSWORD_STRENGTH_PATTERN,
            message=(
                "Password must contain at least one lowercase letter, "
                "one uppercase letter, and one number"
            ),
        ),
        body("userType")
        .optional()
        .is_in(enum_values(UserType), message="UserType must be either candidate, expert, or admin"),
        body("role")
        .optional()
        .is_in(enum_values(UserRole), message="Role must be either candidate or expert"),
        CrossFieldRule("role", _has_role_or_user_type, ROLE_REQUIRED_MESSAGE),
        CrossFieldRule("role", _role_agrees_with_user_type, ROLE_MISMATCH_MESSAGE),
    ],
)

LOGIN = RuleSet(
    "login",
    [
        body("email").trim().is_email(message="Valid email is required").normalize_email(),
        body("password").not_empty(message="Password is required"),
    ],
)

PROFILE_UPDATE = RuleSet(
    "profile_update",
    [
        body("profile").optional().custom(_is_object, message="Profile must be an object"),
        body("profile.bio")
        .optional()
        .is_length(
            max=c.BIO_MAX_LENGTH,
            message=f"Bio must be less than {c.BIO_MAX_LENGTH} characters",
        ),
        body("profile.experience")
        .optional()
        .is_length(
            max=c.EXPERIENCE_MAX_LENGTH,
            message=f"Experience must be less than {c.EXPERIENCE_MAX_LENGTH} characters",
        ),
        body("profile.skills")
        .optional()
        .is_list(c.SKILLS_MAX_COUNT, message=f"Cannot have more than {c.SKILLS_MAX_COUNT} skills"),
        body("profile.hourlyRate")
        .optional()
        .is_float(min=c.HOURLY_RATE_MIN, message="Hourly rate must be a positive number")
        .to_float(),
    ],
)

SESSION_BOOKING = RuleSet(
    "session_booking",
    [
        body("expertId").custom(_is_identifier, message="Valid expert ID is required"),
        body("title")
        .trim()
        .is_length(
            c.TITLE_MIN_LENGTH,
            c.TITLE_MAX_LENGTH,
            message=f"Title must be between {c.TITLE_MIN_LENGTH} and {c.TITLE_MAX_LENGTH} characters",
        ),
        body("description")
        .trim()
        .is_length(
            c.DESCRIPTION_MIN_LENGTH,
            c.DESCRIPTION_MAX_LENGTH,
            message=(
                f"Description must be between {c.DESCRIPTION_MIN_LENGTH} "
                f"and {c.DESCRIPTION_MAX_LENGTH} characters"
            ),
        ),
        body("scheduledDate")
        .is_iso8601(message="Valid scheduled date is required")
        .custom(_is_in_future, message=FUTURE_DATE_MESSAGE),
        body("duration")
        .is_int(
            c.DURATION_MIN_MINUTES,
            c.DURATION_MAX_MINUTES,
            message=(
                f"Duration must be between {c.DURATION_MIN_MINUTES} "
                f"and {c.DURATION_MAX_MINUTES} minutes"
            ),
        )
        .to_int(),
        body("sessionType").is_in(enum_values(SessionType), message="Invalid session type"),
    ],
)

STATUS_UPDATE = RuleSet(
    "status_update",
    [body("status").is_in(enum_values(SessionStatus), message="Invalid session status")],
)


def _category_rule(category: ReviewCategory):
    label = category.value.capitalize()
    return (
        body(f"categories.{category.value}")
        .optional()
        .is_int(
            c.RATING_MIN,
            c.RATING_MAX,
            message=f"{label} rating must be between {c.RATING_MIN} and {c.RATING_MAX}",
        )
        .to_int()
    )


REVIEW = RuleSet(
    "review",
    [
        body("sessionId")
        .not_empty(message="Valid session ID is required")
        .is_string(message="Session ID must be a string"),
        body("rating")
        .is_int(
            c.RATING_MIN,
            c.RATING_MAX,
            message=f"Rating must be between {c.RATING_MIN} and {c.RATING_MAX}",
        )
        .to_int(),
        body("comment")
        .trim()
        .is_length(
            c.COMMENT_MIN_LENGTH,
            c.COMMENT_MAX_LENGTH,
            message=(
                f"Comment must be between {c.COMMENT_MIN_LENGTH} "
                f"and {c.COMMENT_MAX_LENGTH} characters"
            ),
        ),
        body("categories").optional().custom(_is_object, message="Categories must be an object"),
        *[_category_rule(category) for category in ReviewCategory],
    ],
)

PAGINATION = RuleSet(
    "pagination",
    [
        query("page")
        .optional()
        .is_int(c.PAGE_MIN, message="Page must be a positive integer")
        .to_int(),
        query("limit")
        .optional()
        .is_int(
            c.LIMIT_MIN,
            c.LIMIT_MAX,
            message=f"Limit must be between {c.LIMIT_MIN} and {c.LIMIT_MAX}",
        )
        .to_int(),
    ],
)


def identifier(name: str) -> RuleSet:
    """
    Rule set for an id path parameter.

    Accepts a 24-character hex document id or an alphanumeric relational id of
    10 to 50 characters; messages name the parameter.
    """
    return RuleSet(
        f"identifier:{name}",
        [
            param(name)
            .not_empty(message=f"{name} is required")
            .is_string(message=f"{name} must be a string")
            .custom(_is_identifier, message=f"Invalid {name} format"),
        ],
    )
