"""
Pydantic schemas for request/response validation.
"""

# Envelope
from .response import CamelModel, APIResponse

# Authentication schemas
from .auth import (
    LoginRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    AuthResponse
)

# User schemas
from .user import (
    UserRegister,
    UserResponse,
    OwnerContact
)

# Property schemas
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyUpdate,
    PropertyFilterRequest,
    SendOwnerInfoRequest,
    ToggleLikeRequest,
    PropertyResponse,
    PropertyWithOwnerResponse,
    PropertyDetailResponse
)

# Error schemas
from .error import ErrorResponse

__all__ = [
    # Envelope
    "CamelModel",
    "APIResponse",

    # Authentication
    "LoginRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "AuthResponse",

    # User
    "UserRegister",
    "UserResponse",
    "OwnerContact",

    # Property
    "PropertyBase",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyFilterRequest",
    "SendOwnerInfoRequest",
    "ToggleLikeRequest",
    "PropertyResponse",
    "PropertyWithOwnerResponse",
    "PropertyDetailResponse",

    # Errors
    "ErrorResponse"
]
