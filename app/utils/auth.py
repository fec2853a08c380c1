"""
Authentication utilities for JWT token management and password hashing.
Provides the token service and the bcrypt credential helpers.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from app.config import Settings
from app.utils.exceptions import InternalServerError, InvalidTokenError, TokenExpiredError
import logging
import secrets
import string
import uuid

logger = logging.getLogger(__name__)

# Password hashing context; bcrypt draws a new random salt on every hash
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SPECIAL_CHARACTERS = "!@#$%^&*()_+"


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string

    Raises:
        InternalServerError: If the hashing backend fails
    """
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as e:
        logger.error(f"Password hashing failed: {e}")
        raise InternalServerError("Error encrypting password")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify password against hash.

    A mismatch is a normal negative result; a malformed hash is a fault.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise

    Raises:
        InternalServerError: If the stored hash cannot be checked
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Password comparison failed: {e}")
        raise InternalServerError("Error comparing passwords")


def generate_random_password(length: int = 12) -> str:
    """
    Generate a random password that satisfies the complexity policy.

    Uses the secrets CSPRNG; one character of each required class is
    guaranteed and the result is shuffled.
    """
    if length < 4:
        raise ValueError("Password length must be at least 4")

    rng = secrets.SystemRandom()
    charset = string.ascii_letters + string.digits + SPECIAL_CHARACTERS
    chars = [
        secrets.choice(string.ascii_lowercase),
        secrets.choice(string.ascii_uppercase),
        secrets.choice(string.digits),
        secrets.choice(SPECIAL_CHARACTERS),
    ]
    chars.extend(secrets.choice(charset) for _ in range(length - len(chars)))
    rng.shuffle(chars)
    return "".join(chars)


class TokenService:
    """
    Issues and verifies signed, time-limited access tokens.

    The signing key and validity window come from the settings the service
    is built with. The same window is used for the cookie lifetime so the
    two expiries cannot drift apart.
    """

    token_type = "access"

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 24 * 60):
        if not secret_key:
            raise ValueError("A signing key is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    @property
    def max_age_seconds(self) -> int:
        """Lifetime of a freshly issued token, in seconds."""
        return self.expire_minutes * 60

    def issue(self, user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT access token for the user.

        Args:
            user_id: User's UUID
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))

        to_encode: Dict[str, Any] = {
            "sub": str(user_id),
            "exp": expire,
            "iat": now,
            "type": self.token_type,
        }

        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify and decode a JWT access token.

        Args:
            token: JWT token string

        Returns:
            The user id carried by the token

        Raises:
            TokenExpiredError: If the expiry claim has passed
            InvalidTokenError: If the token is malformed, tampered with or not an access token
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            logger.debug(f"Token verification failed: {e}")
            raise InvalidTokenError()

        if payload.get("type") != self.token_type:
            raise InvalidTokenError()

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError()

        try:
            uuid.UUID(user_id)
        except (ValueError, TypeError):
            raise InvalidTokenError()

        return user_id
