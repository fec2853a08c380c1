"""
User model with credential handling.
Handles buyer and seller accounts and their watchlist.
"""

from sqlalchemy import String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from app.models.like import property_likes
from app.utils.auth import hash_password, verify_password
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class UserType(str, enum.Enum):
    """Account type chosen at registration."""
    BUYER = "buyer"
    SELLER = "seller"


class User(Base):
    """
    User model for authentication and ownership of listings.
    Only the password hash is ever stored.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Lower-cased email address - must be unique"
    )

    first_name: Mapped[str] = mapped_column(String(20), nullable=False)

    last_name: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)

    user_type: Mapped[UserType] = mapped_column(
        SQLEnum(UserType, values_callable=lambda e: [member.value for member in e]),
        nullable=False,
        comment="buyer or seller"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    # Watchlist; the other side is Property.liked_by
    liked_properties: Mapped[List["Property"]] = relationship(
        "Property",
        secondary=property_likes,
        back_populates="liked_by",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email}, user_type={self.user_type})>"

    @staticmethod
    def normalize_email(email: str) -> str:
        """Emails are stored trimmed and lower-cased."""
        return email.strip().lower()

    def set_password(self, password: str) -> None:
        """
        Set a new password for the user.

        This is the only place the hash changes, so it is recomputed exactly
        when the plaintext changes.

        Args:
            password: Plain text password
        """
        self.hashed_password = hash_password(password)

    def verify_password(self, password: str) -> bool:
        """
        Verify a password against the stored hash.

        Args:
            password: Plain text password to verify

        Returns:
            True if password matches, False otherwise
        """
        return verify_password(password, self.hashed_password)

    def to_dict(self) -> dict:
        """
        Convert user to dictionary (excluding sensitive data).

        Returns:
            Dictionary representation of user
        """
        return {
            "id": str(self.id),
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone_number": self.phone_number,
            "user_type": self.user_type.value,
            "likes": [str(prop.id) for prop in self.liked_properties],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_contact_dict(self) -> dict:
        """Contact details shared with interested buyers."""
        return {
            "id": str(self.id),
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone_number": self.phone_number,
        }
