# backend/coachbook/core/constants.py
"""
Field constraints shared by every schema definition.

The relational models, the document schemas, the canonical entities and the
request rule sets all read their limits from here. Changing a limit in this
module changes it everywhere at once.
"""

import re
from typing import Final

# User
NAME_MIN_LENGTH: Final = 2
NAME_MAX_LENGTH: Final = 50
PASSWORD_MIN_LENGTH: Final = 6
PASSWORD_STRENGTH_PATTERN: Final = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")
BIO_MAX_LENGTH: Final = 500
EXPERIENCE_MAX_LENGTH: Final = 200
SKILLS_MAX_COUNT: Final = 20
PROFILE_RATING_MIN: Final = 0
PROFILE_RATING_MAX: Final = 5
HOURLY_RATE_MIN: Final = 0
TOTAL_SESSIONS_MIN: Final = 0
DEFAULT_TIMEZONE: Final = "UTC"
DEFAULT_WORKING_HOURS_START: Final = "09:00"
DEFAULT_WORKING_HOURS_END: Final = "17:00"

# Session
TITLE_MIN_LENGTH: Final = 5
TITLE_MAX_LENGTH: Final = 100
DESCRIPTION_MIN_LENGTH: Final = 10
DESCRIPTION_MAX_LENGTH: Final = 1000
DURATION_MIN_MINUTES: Final = 15
DURATION_MAX_MINUTES: Final = 480
DURATION_DEFAULT_MINUTES: Final = 60
PRICE_MIN: Final = 0
SESSION_NOTE_MAX_LENGTH: Final = 500
FEEDBACK_COMMENT_MAX_LENGTH: Final = 500

# Review
RATING_MIN: Final = 1
RATING_MAX: Final = 5
COMMENT_MIN_LENGTH: Final = 1
COMMENT_MAX_LENGTH: Final = 1000
HELPFUL_VOTES_MIN: Final = 0

# Identifiers
OBJECT_ID_PATTERN: Final = re.compile(r"^[0-9a-fA-F]{24}$")
RELATIONAL_ID_PATTERN: Final = re.compile(r"^[a-z0-9]+$", re.IGNORECASE)
RELATIONAL_ID_MIN_LENGTH: Final = 10
RELATIONAL_ID_MAX_LENGTH: Final = 50

# Pagination
PAGE_MIN: Final = 1
LIMIT_MIN: Final = 1
LIMIT_MAX: Final = 100
DEFAULT_PAGE: Final = 1
DEFAULT_LIMIT: Final = 10
