"""
Tests for repository layer.
Tests persistence, filtering and the watchlist relation.
"""

import pytest
import uuid
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.like import property_likes
from app.models.property import Property
from app.models.user import User
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.user import UserRepository
from tests.conftest import DEFAULT_PASSWORD, PropertyFactory, UserFactory


class TestUserRepository:
    """Test user repository operations."""

    @pytest.mark.asyncio
    async def test_create_user_hashes_password(self, user_repository: UserRepository):
        user = await UserFactory.create_user(user_repository, email="New.Seller@Rentify.io")

        assert user.id is not None
        assert user.email == "new.seller@rentify.io"
        assert user.hashed_password != DEFAULT_PASSWORD
        assert user.verify_password(DEFAULT_PASSWORD)

    @pytest.mark.asyncio
    async def test_create_user_does_not_mutate_input(self, user_repository: UserRepository):
        data = UserFactory.create_user_data()
        await user_repository.create_user(data)
        assert data["password"] == DEFAULT_PASSWORD

    @pytest.mark.asyncio
    async def test_get_by_email_is_case_insensitive(self, user_repository: UserRepository, test_seller: User):
        found = await user_repository.get_by_email("SELLER@rentify.io")
        assert found is not None
        assert found.id == test_seller.id

    @pytest.mark.asyncio
    async def test_get_by_email_unknown(self, user_repository: UserRepository):
        assert await user_repository.get_by_email("nobody@rentify.io") is None

    @pytest.mark.asyncio
    async def test_email_exists(self, user_repository: UserRepository, test_seller: User):
        assert await user_repository.email_exists("seller@rentify.io") is True
        assert await user_repository.email_exists("Seller@Rentify.io") is True
        assert await user_repository.email_exists("other@rentify.io") is False

    @pytest.mark.asyncio
    async def test_get_by_id(self, user_repository: UserRepository, test_seller: User):
        assert (await user_repository.get_by_id(test_seller.id)).email == test_seller.email
        assert await user_repository.get_by_id(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_by_unknown_field(self, user_repository: UserRepository):
        with pytest.raises(ValueError):
            await user_repository.get_by_field("nickname", "asha")

    @pytest.mark.asyncio
    async def test_update_password(self, user_repository: UserRepository, test_seller: User):
        await user_repository.update_password(test_seller, "N3w!Password")

        reloaded = await user_repository.get_by_email("seller@rentify.io")
        assert reloaded.verify_password("N3w!Password")
        assert not reloaded.verify_password(DEFAULT_PASSWORD)

    @pytest.mark.asyncio
    async def test_stage_password_rolls_back(
        self,
        db_session: AsyncSession,
        user_repository: UserRepository,
        test_seller: User
    ):
        original_hash = test_seller.hashed_password

        await user_repository.stage_password(test_seller, "N3w!Password")
        assert test_seller.verify_password("N3w!Password")

        await db_session.rollback()
        await db_session.refresh(test_seller)

        assert test_seller.hashed_password == original_hash
        assert test_seller.verify_password(DEFAULT_PASSWORD)

    @pytest.mark.asyncio
    async def test_count(self, user_repository: UserRepository, test_seller: User, test_buyer: User):
        assert await user_repository.count() == 2


class TestPropertyRepository:
    """Test property repository operations."""

    @pytest.mark.asyncio
    async def test_create_property(self, property_repository: PropertyRepository, test_seller: User):
        property_obj = await PropertyFactory.create_property(property_repository, owner_id=test_seller.id)

        assert property_obj.id is not None
        assert property_obj.owner_id == test_seller.id
        assert property_obj.liked_by == []

    @pytest.mark.asyncio
    async def test_get_by_owner(
        self,
        property_repository: PropertyRepository,
        test_seller: User,
        test_buyer: User
    ):
        await PropertyFactory.create_property(property_repository, owner_id=test_seller.id, title="First")
        await PropertyFactory.create_property(property_repository, owner_id=test_seller.id, title="Second")
        await PropertyFactory.create_property(property_repository, owner_id=test_buyer.id, title="Other")

        titles = {p.title for p in await property_repository.get_by_owner(test_seller.id)}
        assert titles == {"First", "Second"}
        assert await property_repository.get_by_owner(uuid.uuid4()) == []

    @pytest.mark.asyncio
    async def test_update_skips_none(self, property_repository: PropertyRepository, test_property: Property):
        updated = await property_repository.update(test_property, {"title": "Renovated 2BHK", "price": None})

        assert updated.title == "Renovated 2BHK"
        assert float(updated.price) == 25000.0


class TestPropertyFiltering:
    """Test filter criteria matching."""

    @pytest.fixture
    async def listings(self, property_repository: PropertyRepository, test_seller: User):
        create = PropertyFactory.create_property
        return {
            "cheap": await create(property_repository, test_seller.id, title="cheap", price=10000, bedrooms=1),
            "mid": await create(property_repository, test_seller.id, title="mid", price=20000, bachelors_allowed=False),
            "dear": await create(property_repository, test_seller.id, title="dear", price=30000, bedrooms=3),
            "pune": await create(property_repository, test_seller.id, title="pune", city="Pune"),
            "house": await create(property_repository, test_seller.id, title="house", property_type="House"),
        }

    async def _titles(self, repo: PropertyRepository, **criteria) -> set:
        base = {"property_type": "Flat", "state": "Maharashtra", "city": "Mumbai"}
        base.update(criteria)
        return {p.title for p in await repo.filter_properties(PropertySearchFilters(**base))}

    @pytest.mark.asyncio
    async def test_required_fields_match_exactly(self, property_repository: PropertyRepository, listings):
        assert await self._titles(property_repository) == {"cheap", "mid", "dear"}
        assert await self._titles(property_repository, city="Pune") == {"pune"}
        assert await self._titles(property_repository, property_type="House") == {"house"}

    @pytest.mark.asyncio
    async def test_matching_is_case_sensitive(self, property_repository: PropertyRepository, listings):
        assert await self._titles(property_repository, city="mumbai") == set()

    @pytest.mark.asyncio
    async def test_price_bounds_are_inclusive(self, property_repository: PropertyRepository, listings):
        assert await self._titles(property_repository, min_price=20000, max_price=30000) == {"mid", "dear"}
        assert await self._titles(property_repository, max_price=10000) == {"cheap"}
        assert await self._titles(property_repository, min_price=30000) == {"dear"}

    @pytest.mark.asyncio
    async def test_optional_criteria(self, property_repository: PropertyRepository, listings):
        assert await self._titles(property_repository, bedrooms=3) == {"dear"}
        assert await self._titles(property_repository, bachelors_allowed=False) == {"mid"}
        assert await self._titles(property_repository, bathrooms=5) == set()

    @pytest.mark.asyncio
    async def test_zero_values_still_filter(self, property_repository: PropertyRepository, listings):
        assert await self._titles(property_repository, bedrooms=0) == set()
        assert await self._titles(property_repository, min_price=0) == {"cheap", "mid", "dear"}
        assert await self._titles(property_repository, max_price=0) == set()


class TestWatchlist:
    """Test the like relation between users and listings."""

    async def _like_rows(self, db_session: AsyncSession) -> int:
        result = await db_session.execute(select(func.count()).select_from(property_likes))
        return result.scalar()

    @pytest.mark.asyncio
    async def test_toggle_like_updates_both_sides(
        self,
        property_repository: PropertyRepository,
        test_property: Property,
        test_buyer: User
    ):
        liked = await property_repository.toggle_like(test_property, test_buyer)

        assert liked is True
        assert [u.id for u in test_property.liked_by] == [test_buyer.id]
        assert [p.id for p in test_buyer.liked_properties] == [test_property.id]

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_state(
        self,
        db_session: AsyncSession,
        property_repository: PropertyRepository,
        test_property: Property,
        test_buyer: User
    ):
        assert await property_repository.toggle_like(test_property, test_buyer) is True
        assert await property_repository.toggle_like(test_property, test_buyer) is False

        assert test_property.liked_by == []
        assert test_buyer.liked_properties == []
        assert await self._like_rows(db_session) == 0

    @pytest.mark.asyncio
    async def test_get_watchlist(
        self,
        property_repository: PropertyRepository,
        test_property: Property,
        test_seller: User,
        test_buyer: User
    ):
        other = await PropertyFactory.create_property(property_repository, test_seller.id, title="Unliked")
        await property_repository.toggle_like(test_property, test_buyer)

        watchlist = await property_repository.get_watchlist(test_buyer.id)
        assert [p.id for p in watchlist] == [test_property.id]
        assert other.id not in {p.id for p in watchlist}

        assert await property_repository.get_watchlist(test_seller.id) == []

    @pytest.mark.asyncio
    async def test_delete_property_removes_likes(
        self,
        db_session: AsyncSession,
        property_repository: PropertyRepository,
        test_property: Property,
        test_buyer: User
    ):
        await property_repository.toggle_like(test_property, test_buyer)
        property_id = test_property.id

        await property_repository.delete_property(test_property)
        await db_session.refresh(test_buyer)

        assert await property_repository.get_by_id(property_id) is None
        assert await self._like_rows(db_session) == 0
        assert test_buyer.liked_properties == []
        assert await property_repository.get_watchlist(test_buyer.id) == []
