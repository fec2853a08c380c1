"""
Custom exception classes for the Rentify API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.details = details


class ValidationError(APIException):
    """Validation error exception carrying a field -> message mapping."""

    def __init__(
        self,
        detail: str = "Input Validation Errors",
        field_errors: Optional[Dict[str, str]] = None
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR",
            details=field_errors or None
        )
        self.field_errors = field_errors or {}


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class UnauthorizedError(APIException):
    """Authentication required exception."""

    def __init__(self, detail: str = "Unauthorized access."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenError(APIException):
    """Access forbidden exception."""

    def __init__(self, detail: str = "Access forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class ConflictError(APIException):
    """
    Resource conflict exception.

    Reported as 400 to match the public contract of the registration endpoint.
    """

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="CONFLICT"
        )


class PayloadTooLargeError(APIException):
    """Request body exceeds the configured limit."""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            status_code=413,
            detail=f"Request size {size} bytes exceeds maximum allowed size {max_size} bytes",
            error_code="PAYLOAD_TOO_LARGE"
        )


class InternalServerError(APIException):
    """Internal server error exception."""

    def __init__(self, detail: str = "Internal Server Error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="INTERNAL_SERVER_ERROR"
        )


# Authentication specific exceptions
class InvalidPasswordError(BadRequestError):
    """Wrong password at login."""

    def __init__(self, detail: str = "Invalid password."):
        super().__init__(detail)


class TokenExpiredError(UnauthorizedError):
    """JWT token expired exception."""

    def __init__(self, detail: str = "Token has expired"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):
    """Invalid JWT token exception."""

    def __init__(self, detail: str = "Invalid token."):
        super().__init__(detail)


class MissingTokenError(UnauthorizedError):
    """No token in the cookie or the Authorization header."""

    def __init__(self, detail: str = "No token provided."):
        super().__init__(detail)


class DuplicateEmailError(ConflictError):
    """Email already registered."""

    def __init__(self, detail: str = "Email is already in use."):
        super().__init__(detail)


# Property specific exceptions
class PropertyNotFoundError(NotFoundError):
    """Property not found exception."""

    def __init__(self, detail: str = "Property not found"):
        super().__init__(detail)


class PropertyOwnershipError(ForbiddenError):
    """Property ownership violation exception."""

    def __init__(self, action: str = "modify"):
        super().__init__(f"You are not authorized to {action} this property")
