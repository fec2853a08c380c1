"""
Utility modules for the Rentify API.
"""

from .auth import (
    TokenService,
    hash_password,
    verify_password,
    generate_random_password
)

from .session import (
    TOKEN_COOKIE_NAME,
    set_token_cookie,
    clear_token_cookie,
    extract_token,
    extract_token_from_header
)

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
    PayloadTooLargeError,
    InternalServerError,
    InvalidPasswordError,
    TokenExpiredError,
    InvalidTokenError,
    MissingTokenError,
    DuplicateEmailError,
    PropertyNotFoundError,
    PropertyOwnershipError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "TokenService",
    "hash_password",
    "verify_password",
    "generate_random_password",

    # Session transport
    "TOKEN_COOKIE_NAME",
    "set_token_cookie",
    "clear_token_cookie",
    "extract_token",
    "extract_token_from_header",

    # Exceptions
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "BadRequestError",
    "PayloadTooLargeError",
    "InternalServerError",
    "InvalidPasswordError",
    "TokenExpiredError",
    "InvalidTokenError",
    "MissingTokenError",
    "DuplicateEmailError",
    "PropertyNotFoundError",
    "PropertyOwnershipError",
]
