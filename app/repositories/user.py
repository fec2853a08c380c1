"""
User repository for account persistence.
Provides lookups by email and the password write paths used by the auth flows.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.user import User
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for buyer and seller accounts."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user, hashing the plaintext password.

        Args:
            user_data: Registration fields including a plaintext "password"

        Returns:
            Created user instance
        """
        data = dict(user_data)
        password = data.pop("password")
        data["email"] = User.normalize_email(data["email"])

        user = User(**data)
        user.set_password(password)

        created_user = await self.save(user)
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        return await self.get_by_field("email", User.normalize_email(email))

    async def email_exists(self, email: str) -> bool:
        """Check whether an account already uses this email."""
        return await self.exists("email", User.normalize_email(email))

    async def update_password(self, user: User, new_password: str) -> User:
        """
        Hash and persist a new password for the user.

        Args:
            user: User to update
            new_password: New plain text password

        Returns:
            Updated user instance
        """
        user.set_password(new_password)
        updated_user = await self.save(user)
        logger.info(f"Password updated for user: {updated_user.email}")
        return updated_user

    async def stage_password(self, user: User, new_password: str) -> None:
        """
        Write a new password hash without committing.

        The caller commits once any follow-up work succeeds, or rolls back.

        Args:
            user: User to update
            new_password: New plain text password
        """
        user.set_password(new_password)
        self.db.add(user)
        await self.db.flush()
        logger.debug(f"Staged password change for user: {user.email}")
