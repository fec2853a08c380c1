"""
Authentication service for registration, login, the session gate and password recovery.
Coordinates the user repository, the token service and outbound email.
"""

from typing import Any, Dict, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user import UserRepository
from app.models.user import User
from app.services.email import EmailDeliveryError, EmailService
from app.utils.auth import TokenService, generate_random_password
from app.utils.exceptions import (
    BadRequestError,
    DuplicateEmailError,
    InternalServerError,
    InvalidPasswordError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError
)
from app.utils.validators import ValidationUtils
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing accounts and sessions.
    Handles credential checks, token issuance and the password flows.
    """

    def __init__(self, db_session: AsyncSession, token_service: TokenService):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.token_service = token_service

    async def register(self, user_data: Dict[str, Any]) -> Tuple[User, str]:
        """
        Create an account and open a session for it.

        Args:
            user_data: Validated registration fields, including the plaintext password

        Returns:
            Tuple of (created user, access token)

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        if await self.user_repo.email_exists(user_data["email"]):
            logger.warning(f"Registration rejected, email already in use: {user_data['email']}")
            raise DuplicateEmailError()

        user = await self.user_repo.create_user(user_data)
        token = self.token_service.issue(user.id)

        logger.info(f"User registered: {user.email} (ID: {user.id})")
        return user, token

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user and issue an access token.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Tuple of (user, access token)

        Raises:
            NotFoundError: If no account uses the email
            InvalidPasswordError: If the password does not match
        """
        user = await self.user_repo.get_by_email(email)
        if not user:
            logger.warning(f"Login attempt for unknown email: {email}")
            raise NotFoundError("User does not exist.")

        if not user.verify_password(password):
            logger.warning(f"Failed login attempt for: {email}")
            raise InvalidPasswordError()

        token = self.token_service.issue(user.id)
        logger.info(f"User logged in: {user.email}")
        return user, token

    async def get_current_user(self, token: str) -> User:
        """
        Resolve the user a token was issued for.

        Args:
            token: JWT access token

        Returns:
            Current User object

        Raises:
            InvalidTokenError: If the token is invalid or its user no longer exists
            TokenExpiredError: If the token is expired
        """
        user_id = self.token_service.verify(token)

        user = await self.user_repo.get_by_id(uuid.UUID(user_id))
        if not user:
            logger.warning(f"Token presented for missing user {user_id}")
            raise InvalidTokenError()

        return user

    async def forgot_password(self, email: str, email_service: EmailService) -> None:
        """
        Replace the account's password with a generated one and mail it.

        The new hash is flushed but only committed after the mail provider
        accepted the message.

        Args:
            email: Account email
            email_service: Service used to deliver the new password

        Raises:
            NotFoundError: If no account uses the email
            InternalServerError: If the email could not be delivered
        """
        user = await self.user_repo.get_by_email(email)
        if not user:
            raise NotFoundError("User with this email does not exist.")

        user_id = user.id
        user_email = user.email
        new_password = generate_random_password(12)

        try:
            await self.user_repo.stage_password(user, new_password)
            await email_service.send_password_reset(user_email, new_password)
            await self.db.commit()
        except EmailDeliveryError:
            await self.db.rollback()
            logger.error(f"Password reset email could not be delivered for user {user_id}")
            raise InternalServerError("Failed to send password reset email")
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Password reset issued for: {user_email}")

    async def reset_password(self, email: str, old_password: str, new_password: str) -> User:
        """
        Change a password after checking the current one.

        Args:
            email: Account email
            old_password: Current password
            new_password: Replacement password

        Returns:
            Updated user

        Raises:
            NotFoundError: If no account uses the email
            BadRequestError: If either password is missing
            UnauthorizedError: If the current password does not match
            ValidationError: If the new password fails the complexity policy
        """
        user = await self.user_repo.get_by_email(email)
        if not user:
            raise NotFoundError("User not found.")

        if not old_password or not new_password:
            raise BadRequestError("Both old and new passwords are required.")

        if not user.verify_password(old_password):
            logger.warning(f"Password reset with wrong current password for: {email}")
            raise UnauthorizedError("Invalid old password.")

        ValidationUtils.validate_password_strength(new_password, field_name="newPassword")

        user = await self.user_repo.update_password(user, new_password)
        logger.info(f"Password reset for: {user.email}")
        return user
