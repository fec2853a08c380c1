"""
Pydantic schemas for authentication requests and responses.
Handles login, password recovery and the token-bearing session payload.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional
from app.schemas.response import CamelModel
from app.schemas.user import UserResponse


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["seller@rentify.io"]
    )
    password: str = Field(
        ...,
        min_length=1,
        description="User's password",
        examples=["Str0ng!Pass"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class ForgotPasswordRequest(CamelModel):
    """Forgot-password request schema."""

    email: EmailStr = Field(..., description="Email of the account to recover")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class ResetPasswordRequest(CamelModel):
    """
    Reset-password request schema.

    Presence of both passwords and the new password's complexity are checked
    by the service, after the account lookup.
    """

    email: EmailStr = Field(..., description="Email of the account")
    old_password: Optional[str] = Field(None, description="Current password")
    new_password: Optional[str] = Field(None, description="Replacement password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class AuthResponse(CamelModel):
    """Registration/login payload: the user and a freshly issued token."""

    user: UserResponse
    token: str = Field(..., description="JWT access token, also set as the `token` cookie")
