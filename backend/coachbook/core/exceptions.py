# backend/coachbook/core/exceptions.py
"""
Domain-specific exceptions for the CoachBook platform.

Services raise these; the API layer turns them into HTTP responses through the
handlers in `coachbook.errors`.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from fastapi import status

if TYPE_CHECKING:
    from ..validation.rules import FieldError

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class RequestValidationFailed(ValidationException):
    """
    Raised by the validation gate when a rule set produced errors.

    Carries every failure of the request, in rule order.
    """

    def __init__(self, errors: Sequence["FieldError"]) -> None:
        self.errors: List["FieldError"] = list(errors)
        super().__init__("Validation failed", code="VALIDATION_FAILED")

    def error_list(self) -> List[Dict[str, str]]:
        return [error.to_dict() for error in self.errors]


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class InvalidStatusTransitionException(BusinessRuleException):
    """Raised when a session status change is not in the declared transition table."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            f"Cannot change session status from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"current_status": current, "requested_status": requested},
        )


class UnauthorizedException(DomainException):
    """Raised when user is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class RepositoryException(DomainException):
    """Raised when a data access operation fails."""


class DocumentSchemaException(DomainException):
    """Raised when an entity cannot be represented on the document backend."""

    status_code = HTTP_422_UNPROCESSABLE
