"""
FastAPI dependency injection utilities for authentication, services and database sessions.
Provides the session gate used to protect routes.
"""

from functools import lru_cache
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import get_settings
from app.database import get_db
from app.models.user import User
from app.services.auth import AuthService
from app.services.email import EmailService
from app.services.property import PropertyService
from app.utils.auth import TokenService
from app.utils.exceptions import MissingTokenError
from app.utils.session import extract_token


@lru_cache()
def get_token_service() -> TokenService:
    """Token service built once from the application settings."""
    return TokenService.from_settings(get_settings())


@lru_cache()
def get_email_service() -> EmailService:
    """Email service sharing one HTTP client for the process lifetime."""
    return EmailService.from_settings(get_settings())


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Database session
        token_service: Token issuer and verifier

    Returns:
        AuthService instance
    """
    return AuthService(db, token_service)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session

    Returns:
        PropertyService instance
    """
    return PropertyService(db)


async def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from the session cookie or Bearer header.

    Args:
        request: Incoming request
        auth_service: Authentication service

    Returns:
        Current User object

    Raises:
        MissingTokenError: If no token was sent
        InvalidTokenError: If the token is invalid or its user is gone
        TokenExpiredError: If the token is expired
    """
    token = extract_token(request)
    if not token:
        raise MissingTokenError()

    return await auth_service.get_current_user(token)
