"""
Custom Exception Classes for Galatide

This module defines the error taxonomy shared by the service layer and the
HTTP layer. Services raise these exceptions; the handlers in
``galatide.exception_handlers`` render them as consistent JSON errors.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes exposed in error responses."""

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_ARTICLE_NOT_FOUND = "RESOURCE_ARTICLE_NOT_FOUND"
    RESOURCE_TRANSLATION_NOT_FOUND = "RESOURCE_TRANSLATION_NOT_FOUND"
    RESOURCE_LANGUAGE_NOT_FOUND = "RESOURCE_LANGUAGE_NOT_FOUND"
    RESOURCE_TAG_NOT_FOUND = "RESOURCE_TAG_NOT_FOUND"
    RESOURCE_USER_NOT_FOUND = "RESOURCE_USER_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"
    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class GalatideError(Exception):
    """Base exception class for all Galatide errors"""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Not Found
# ============================================================================


class NotFoundError(GalatideError):
    """Base class for missing entities and unresolvable content"""

    error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ArticleNotFoundError(NotFoundError):
    """Raised when an article (or a displayable content record) is not found"""

    error_code = ErrorCode.RESOURCE_ARTICLE_NOT_FOUND

    def __init__(self, article_id: Any | None = None):
        super().__init__(resource_type="Article", resource_id=article_id)


class TranslationNotFoundError(NotFoundError):
    error_code = ErrorCode.RESOURCE_TRANSLATION_NOT_FOUND

    def __init__(self, translation_id: Any | None = None):
        super().__init__(resource_type="Translation", resource_id=translation_id)


class LanguageNotFoundError(NotFoundError):
    error_code = ErrorCode.RESOURCE_LANGUAGE_NOT_FOUND

    def __init__(self, language: Any | None = None):
        super().__init__(resource_type="Language", resource_id=language)


class TagNotFoundError(NotFoundError):
    error_code = ErrorCode.RESOURCE_TAG_NOT_FOUND

    def __init__(self, tag_id: Any | None = None):
        super().__init__(resource_type="Tag", resource_id=tag_id)


class UserNotFoundError(NotFoundError):
    error_code = ErrorCode.RESOURCE_USER_NOT_FOUND

    def __init__(self, user_id: Any | None = None):
        super().__init__(resource_type="User", resource_id=user_id)


# ============================================================================
# Validation & Conflicts
# ============================================================================


class ValidationError(GalatideError):
    """Raised when input fields are malformed"""

    error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class ConflictError(GalatideError):
    """Raised when a write would violate a uniqueness rule"""

    error_code = ErrorCode.VALIDATION_DUPLICATE_RESOURCE

    def __init__(self, resource_type: str, field: str, value: Any):
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource_type": resource_type, "field": field, "value": value},
        )


class PermissionDeniedError(GalatideError):
    """Raised when the request role may not perform an action"""

    error_code = ErrorCode.AUTH_PERMISSION_DENIED

    def __init__(self, role: str, action: str):
        super().__init__(
            message=f"Role '{role}' may not {action}",
            status_code=status.HTTP_403_FORBIDDEN,
            details={"role": role, "action": action},
        )


# ============================================================================
# Persistence
# ============================================================================


class StoreUnavailableError(GalatideError):
    """Raised when the database is unconfigured or unreachable"""

    error_code = ErrorCode.STORE_UNAVAILABLE

    def __init__(self, message: str = "Database not available", reason: str | None = None):
        details = {"reason": reason} if reason else {}
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE, details=details)
