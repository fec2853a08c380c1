"""
Validation utilities for the Rentify API.
Holds the field rules shared by request schemas and services.
"""

import re
from typing import Optional

from app.utils.exceptions import ValidationError


class ValidationUtils:
    """
    Utility class for common validation operations.
    Provides reusable checks for account fields.
    """

    PASSWORD_PATTERN = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?=.*\W).{8,}$")
    PHONE_PATTERN = re.compile(r"^\+\d{1,3}\s?\d{6,14}$")

    PASSWORD_POLICY_MESSAGE = (
        "Password must be at least 8 characters long and include one special character, "
        "one lowercase letter, one uppercase letter, and one numeric value."
    )
    PHONE_MESSAGE = "Valid phone number is required. Example: +918696958620"
    FIRST_NAME_MESSAGE = "First name is required and should be 3-20 characters long."
    LAST_NAME_MESSAGE = "Last name should not exceed 20 characters."

    @staticmethod
    def is_strong_password(password: Optional[str]) -> bool:
        """Check a password against the complexity policy."""
        return bool(password) and ValidationUtils.PASSWORD_PATTERN.match(password) is not None

    @staticmethod
    def is_valid_phone_number(phone_number: Optional[str]) -> bool:
        """Check an international phone number such as +918696958620."""
        return bool(phone_number) and ValidationUtils.PHONE_PATTERN.match(phone_number) is not None

    @staticmethod
    def is_valid_first_name(name: Optional[str]) -> bool:
        return bool(name) and 3 <= len(name) <= 20

    @staticmethod
    def is_valid_last_name(name: Optional[str]) -> bool:
        return name is None or len(name) <= 20

    @staticmethod
    def validate_password_strength(password: str, field_name: str = "password") -> str:
        """
        Enforce the password complexity policy.

        Raises:
            ValidationError: If the password is too weak
        """
        if not ValidationUtils.is_strong_password(password):
            raise ValidationError(
                ValidationUtils.PASSWORD_POLICY_MESSAGE,
                field_errors={field_name: ValidationUtils.PASSWORD_POLICY_MESSAGE},
            )
        return password
