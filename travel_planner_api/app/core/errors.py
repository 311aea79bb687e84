"""
Application exceptions.

Services raise these exceptions; the handlers registered in
``main.create_app`` turn them into the standard response envelope::

    {"success": false, "message": "...", "errors": [...]}

Each exception carries an ``ErrorCode`` and the HTTP status that code
maps to, so the mapping lives in one place.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Error categories surfaced to API clients."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: 400,
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    # Duplicate e-mail on registration has always been reported as 400.
    ErrorCode.CONFLICT: 400,
    ErrorCode.INTERNAL: 500,
}


class TravelPlannerError(Exception):
    """Base exception for all Travel Planner errors."""

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message
        if code is not None:
            self.code = code
        self.errors = errors
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES.get(self.code, 500)


class ValidationFailedError(TravelPlannerError):
    """Missing or malformed fields, or an inconsistent time range."""

    code = ErrorCode.VALIDATION_FAILED


class UnauthenticatedError(TravelPlannerError):
    """Missing, invalid or expired credentials."""

    code = ErrorCode.UNAUTHENTICATED


class ForbiddenError(TravelPlannerError):
    """Authenticated, but not the owner of the resource."""

    code = ErrorCode.FORBIDDEN


class NotFoundError(TravelPlannerError):
    code = ErrorCode.NOT_FOUND


class ConflictError(TravelPlannerError):
    """Unique constraint violation (e.g. duplicate e-mail)."""

    code = ErrorCode.CONFLICT


class InternalError(TravelPlannerError):
    code = ErrorCode.INTERNAL


class PersistenceError(InternalError):
    """The database rejected or failed an operation."""

    pass
