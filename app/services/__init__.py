"""
Service layer for business logic implementation.
Contains services for authentication, property management, email and error handling.
"""

from .auth import AuthService
from .property import PropertyService
from .email import EmailService, EmailDeliveryError
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "EmailService",
    "EmailDeliveryError",
    "ErrorHandlerService"
]
