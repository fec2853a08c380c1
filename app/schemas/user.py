"""
Pydantic schemas for user requests and responses.
Handles registration input validation and the public user representation.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from app.models.user import UserType
from app.schemas.response import CamelModel
from app.utils.validators import ValidationUtils


class UserRegister(CamelModel):
    """Schema for registering a new user."""

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["seller@rentify.io"]
    )

    first_name: str = Field(
        ...,
        description="First name, 3-20 characters",
        examples=["Asha"]
    )

    last_name: Optional[str] = Field(
        None,
        description="Last name, at most 20 characters",
        examples=["Verma"]
    )

    phone_number: str = Field(
        ...,
        description="Phone number with country code",
        examples=["+918696958620"]
    )

    user_type: UserType = Field(
        ...,
        description="Account type - buyer or seller",
        examples=["seller"]
    )

    password: str = Field(
        ...,
        description="Password meeting the complexity policy",
        examples=["Str0ng!Pass"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v):
        v = v.strip()
        if not ValidationUtils.is_valid_first_name(v):
            raise ValueError(ValidationUtils.FIRST_NAME_MESSAGE)
        return v

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v):
        v = v.strip() if v is not None else None
        if not ValidationUtils.is_valid_last_name(v):
            raise ValueError(ValidationUtils.LAST_NAME_MESSAGE)
        return v or None

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v):
        v = v.strip()
        if not ValidationUtils.is_valid_phone_number(v):
            raise ValueError(ValidationUtils.PHONE_MESSAGE)
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        """Validate password strength."""
        if not ValidationUtils.is_strong_password(v):
            raise ValueError(ValidationUtils.PASSWORD_POLICY_MESSAGE)
        return v


class UserResponse(CamelModel):
    """User response schema (excluding sensitive data)."""

    id: str = Field(..., description="User's unique identifier")
    email: str = Field(..., description="User's email address")
    first_name: str
    last_name: Optional[str] = None
    phone_number: str
    user_type: UserType
    likes: List[str] = Field(default_factory=list, description="IDs of liked properties")
    created_at: datetime
    updated_at: datetime


class OwnerContact(CamelModel):
    """Contact details of a listing owner."""

    id: str
    email: str
    first_name: str
    last_name: Optional[str] = None
    phone_number: str
