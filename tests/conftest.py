"""
Test configuration and fixtures for the Rentify API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Required settings must exist before the application modules are imported
os.environ.setdefault("DB_URI", "sqlite+aiosqlite://")
os.environ.setdefault("DB_NAME", ":memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-signing-key-for-rentify")
os.environ.setdefault("SENDGRID_API_KEY", "SG.test-key")
os.environ.setdefault("SENDGRID_FROM_EMAIL", "noreply@rentify.io")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
import uuid
from typing import AsyncGenerator, Dict, Optional
from unittest.mock import AsyncMock
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

import app.models  # noqa: F401
from app.main import app as fastapi_app
from app.database import Base, get_db
from app.models.user import User, UserType
from app.models.property import Property
from app.repositories.user import UserRepository
from app.repositories.property import PropertyRepository
from app.services.auth import AuthService
from app.services.email import EmailService
from app.services.property import PropertyService
from app.utils.auth import TokenService
from app.utils.dependencies import get_email_service, get_token_service


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "Str0ng!Pass"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
def token_service() -> TokenService:
    """Token service configured from the test settings."""
    return get_token_service()


@pytest.fixture
def email_service() -> AsyncMock:
    """Email service double; every send succeeds unless a test says otherwise."""
    return AsyncMock(spec=EmailService)


@pytest.fixture
async def async_client(db_session: AsyncSession, email_service: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session and email overrides."""
    async def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_email_service] = lambda: email_service

    transport = ASGITransport(app=fastapi_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    fastapi_app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession, token_service: TokenService) -> AuthService:
    """Create an auth service instance."""
    return AuthService(db_session, token_service)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    """Create a property service instance."""
    return PropertyService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        first_name: str = "Asha",
        last_name: Optional[str] = "Verma",
        phone_number: str = "+918696958620",
        user_type: UserType = UserType.SELLER
    ) -> dict:
        """Create user data dictionary."""
        return {
            "email": email or f"user{uuid.uuid4().hex[:8]}@rentify.io",
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
            "phone_number": phone_number,
            "user_type": user_type
        }

    @staticmethod
    def create_register_payload(**overrides) -> dict:
        """Registration request body with camelCase keys."""
        data = UserFactory.create_user_data(**overrides)
        return {
            "email": data["email"],
            "password": data["password"],
            "firstName": data["first_name"],
            "lastName": data["last_name"],
            "phoneNumber": data["phone_number"],
            "userType": data["user_type"].value
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **overrides) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**overrides))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        property_type: str = "Flat",
        title: str = "2BHK near Andheri station",
        state: str = "Maharashtra",
        city: str = "Mumbai",
        local_area: str = "Andheri West",
        bedrooms: int = 2,
        bathrooms: int = 2,
        bachelors_allowed: bool = True,
        nearby_railway_station_distance: float = 1.5,
        nearby_hospital_distance: float = 0.8,
        price: float = 25000
    ) -> dict:
        """Create property data dictionary."""
        return {
            "property_type": property_type,
            "title": title,
            "state": state,
            "city": city,
            "local_area": local_area,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "bachelors_allowed": bachelors_allowed,
            "nearby_railway_station_distance": nearby_railway_station_distance,
            "nearby_hospital_distance": nearby_hospital_distance,
            "price": price
        }

    @staticmethod
    def create_request_payload(**overrides) -> dict:
        """Listing request body with camelCase keys."""
        data = PropertyFactory.create_property_data(**overrides)
        return {
            "propertyType": data["property_type"],
            "title": data["title"],
            "state": data["state"],
            "city": data["city"],
            "localArea": data["local_area"],
            "bedrooms": data["bedrooms"],
            "bathrooms": data["bathrooms"],
            "bachelorsAllowed": data["bachelors_allowed"],
            "nearbyRailwayStationDistance": data["nearby_railway_station_distance"],
            "nearbyHospitalDistance": data["nearby_hospital_distance"],
            "price": data["price"]
        }

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        owner_id: uuid.UUID,
        **overrides
    ) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property(
            PropertyFactory.create_property_data(**overrides),
            owner_id=owner_id
        )


# Common test fixtures
@pytest.fixture
async def test_seller(user_repository: UserRepository) -> User:
    """Create a test seller."""
    return await UserFactory.create_user(
        user_repository,
        email="seller@rentify.io",
        first_name="Asha",
        user_type=UserType.SELLER
    )


@pytest.fixture
async def test_buyer(user_repository: UserRepository) -> User:
    """Create a test buyer."""
    return await UserFactory.create_user(
        user_repository,
        email="buyer@rentify.io",
        first_name="Rahul",
        last_name="Mehta",
        phone_number="+919812345678",
        user_type=UserType.BUYER
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_seller: User) -> Property:
    """Create a test property owned by the seller."""
    return await PropertyFactory.create_property(property_repository, owner_id=test_seller.id)


# Utility functions for tests
def cookie_headers(token_service: TokenService, user: User) -> Dict[str, str]:
    """Session cookie header for the given user."""
    return {"Cookie": f"token={token_service.issue(user.id)}"}


def bearer_headers(token_service: TokenService, user: User) -> Dict[str, str]:
    """Authorization header for the given user."""
    return {"Authorization": f"Bearer {token_service.issue(user.id)}"}


def assert_error_envelope(response, status_code: int, message: Optional[str] = None) -> dict:
    """Assert the error envelope shape and return its body."""
    assert response.status_code == status_code
    body = response.json()
    assert body["statusCode"] == status_code
    assert body["success"] is False
    assert "details" in body
    if message is not None:
        assert body["message"] == message
    return body
