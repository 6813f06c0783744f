"""Domain Errors - Centralized Exception Hierarchy"""
from typing import Any, Dict, Optional

from .enums import WorkflowErrorKind


class DomainError(Exception):
    """Base domain error - all errors extend this"""

    error_code: str = "DOMAIN_ERROR"
    http_status: int = 400
    kind: Optional[WorkflowErrorKind] = None

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to API response dict"""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


# Authorization Errors
class AuthenticationError(DomainError):
    """Actor identity missing from the request"""
    error_code = "AUTHENTICATION_ERROR"
    http_status = 401


class PermissionDeniedError(DomainError):
    """Actor's role does not allow the action"""
    error_code = "PERMISSION_DENIED"
    http_status = 403


# Validation Errors
class ValidationError(DomainError):
    """Input validation failed"""
    error_code = "VALIDATION_ERROR"
    http_status = 400


class MissingInputError(ValidationError):
    """A required transition input is absent or blank"""
    error_code = "MISSING_INPUT"
    kind = WorkflowErrorKind.MISSING_INPUT


class InvalidInputError(ValidationError):
    """A transition input is present but semantically invalid"""
    error_code = "INVALID_INPUT"
    kind = WorkflowErrorKind.INVALID_INPUT


# Not Found Errors
class NotFoundError(DomainError):
    """Resource not found"""
    error_code = "NOT_FOUND"
    http_status = 404


class ArticleNotFoundError(NotFoundError):
    """Article unknown to the store"""
    error_code = "ARTICLE_NOT_FOUND"
    kind = WorkflowErrorKind.NOT_FOUND


# Conflict Errors
class ConflictError(DomainError):
    """Resource conflict"""
    error_code = "CONFLICT"
    http_status = 409


class ConcurrentModificationError(ConflictError):
    """Stored state no longer matches what the caller expected"""
    error_code = "CONCURRENT_MODIFICATION"
    kind = WorkflowErrorKind.CONCURRENT_MODIFICATION


class InvalidTransitionError(ConflictError):
    """Action not legal from the article's current status"""
    error_code = "INVALID_TRANSITION"
    kind = WorkflowErrorKind.INVALID_TRANSITION


class AlreadyExistsError(ConflictError):
    """Resource already exists"""
    error_code = "ALREADY_EXISTS"


ERROR_BY_KIND = {
    WorkflowErrorKind.INVALID_TRANSITION: InvalidTransitionError,
    WorkflowErrorKind.MISSING_INPUT: MissingInputError,
    WorkflowErrorKind.INVALID_INPUT: InvalidInputError,
    WorkflowErrorKind.CONCURRENT_MODIFICATION: ConcurrentModificationError,
    WorkflowErrorKind.NOT_FOUND: ArticleNotFoundError,
}
