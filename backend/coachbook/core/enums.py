# backend/coachbook/core/enums.py
"""
Core enums for the CoachBook platform.

All enums inherit from (str, Enum) so the persisted value is the lower-case
wire value, never the member name.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user can hold on the document backend."""

    CANDIDATE = "candidate"
    EXPERT = "expert"


class UserType(str, Enum):
    """Values accepted for the relational `userType` column at registration."""

    CANDIDATE = "candidate"
    EXPERT = "expert"
    ADMIN = "admin"


class SessionType(str, Enum):
    MOCK_INTERVIEW = "mock-interview"
    RESUME_REVIEW = "resume-review"
    CAREER_GUIDANCE = "career-guidance"
    SKILL_ASSESSMENT = "skill-assessment"
    OTHER = "other"


class SessionStatus(str, Enum):
    """Session lifecycle statuses."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"

    def can_transition_to(self, target: "SessionStatus") -> bool:
        return target in SESSION_STATUS_TRANSITIONS[self]


SESSION_STATUS_TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.PENDING: frozenset({SessionStatus.CONFIRMED, SessionStatus.CANCELLED}),
    SessionStatus.CONFIRMED: frozenset(
        {SessionStatus.IN_PROGRESS, SessionStatus.CANCELLED, SessionStatus.NO_SHOW}
    ),
    SessionStatus.IN_PROGRESS: frozenset({SessionStatus.COMPLETED}),
    SessionStatus.COMPLETED: frozenset(),
    SessionStatus.CANCELLED: frozenset(),
    SessionStatus.NO_SHOW: frozenset(),
}


class PaymentStatus(str, Enum):
    """Payment state, tracked independently from the session status."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"


class ReminderChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"


class ReminderStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    PENDING = "pending"


class VerificationDocumentType(str, Enum):
    RESUME = "resume"
    CERTIFICATE = "certificate"
    PORTFOLIO = "portfolio"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


DEFAULT_DAYS_AVAILABLE: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)


class ReviewCategory(str, Enum):
    """Optional sub-ratings attached to a review."""

    PROFESSIONALISM = "professionalism"
    COMMUNICATION = "communication"
    EXPERTISE = "expertise"
    PUNCTUALITY = "punctuality"
    HELPFULNESS = "helpfulness"


def enum_values(enum_class: type[Enum]) -> list[str]:
    """Return the wire values of an enum, in declaration order."""
    return [member.value for member in enum_class]
