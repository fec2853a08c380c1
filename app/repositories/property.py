"""
Property repository for listing persistence, filtering and the watchlist relation.
Provides the queries behind the property endpoints.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from app.repositories.base import BaseRepository
from app.models.property import Property
from app.models.user import User
from app.models.like import property_likes
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertySearchFilters:
    """Data class for property filter criteria."""

    def __init__(
        self,
        property_type: str,
        state: str,
        city: str,
        bedrooms: Optional[int] = None,
        bathrooms: Optional[int] = None,
        bachelors_allowed: Optional[bool] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None
    ):
        self.property_type = property_type
        self.state = state
        self.city = city
        self.bedrooms = bedrooms
        self.bathrooms = bathrooms
        self.bachelors_allowed = bachelors_allowed
        self.min_price = min_price
        self.max_price = max_price


class PropertyRepository(BaseRepository[Property]):
    """Repository for listings and the likes between users and listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any], owner_id: uuid.UUID) -> Property:
        """
        Create a new listing owned by the given user.

        Args:
            property_data: Listing fields
            owner_id: ID of the posting user

        Returns:
            Created property instance
        """
        created_property = await self.create({**property_data, "owner_id": owner_id})
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def get_by_owner(self, owner_id: uuid.UUID) -> List[Property]:
        """Get every listing posted by the given user, newest first."""
        return await self.get_multi_by_field("owner_id", owner_id)

    async def filter_properties(self, filters: PropertySearchFilters) -> List[Property]:
        """
        Find listings matching the filter criteria.

        propertyType, state and city match exactly. Optional criteria apply
        only when supplied, and the price bounds are inclusive.

        Args:
            filters: Filter criteria

        Returns:
            Matching listings
        """
        try:
            conditions = [
                Property.property_type == filters.property_type,
                Property.state == filters.state,
                Property.city == filters.city,
            ]

            # A supplied zero is a criterion like any other value
            if filters.bedrooms is not None:
                conditions.append(Property.bedrooms == filters.bedrooms)

            if filters.bathrooms is not None:
                conditions.append(Property.bathrooms == filters.bathrooms)

            if filters.bachelors_allowed is not None:
                conditions.append(Property.bachelors_allowed == filters.bachelors_allowed)

            if filters.min_price is not None:
                conditions.append(Property.price >= filters.min_price)

            if filters.max_price is not None:
                conditions.append(Property.price <= filters.max_price)

            query = (
                select(Property)
                .where(and_(*conditions))
                .order_by(Property.created_at.desc())
            )

            result = await self.db.execute(query)
            properties = result.scalars().all()

            logger.debug(f"Filter returned {len(properties)} properties")
            return list(properties)
        except Exception as e:
            logger.error(f"Failed to filter properties: {e}")
            raise

    async def get_watchlist(self, user_id: uuid.UUID) -> List[Property]:
        """Get every listing the given user has liked."""
        try:
            query = (
                select(Property)
                .join(property_likes, property_likes.c.property_id == Property.id)
                .where(property_likes.c.user_id == user_id)
                .order_by(property_likes.c.created_at.desc())
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get watchlist for user {user_id}: {e}")
            raise

    async def delete_property(self, property_obj: Property) -> None:
        """
        Delete a listing together with every like that references it.

        Args:
            property_obj: Listing to delete
        """
        property_obj.liked_by.clear()
        await self.delete(property_obj)
        logger.info(f"Deleted property: {property_obj.id}")

    async def toggle_like(self, property_obj: Property, user: User) -> bool:
        """
        Flip the like between a user and a listing.

        The edge lives in one association row, so both the user's likes and
        the listing's likes change in the same commit.

        Args:
            property_obj: Listing to like or unlike
            user: User performing the action

        Returns:
            True if the listing is now liked, False if the like was removed
        """
        if property_obj.is_liked_by(user.id):
            property_obj.liked_by.remove(user)
            liked = False
        else:
            property_obj.liked_by.append(user)
            liked = True

        await self.save(property_obj)
        await self.db.refresh(user)

        logger.info(
            f"User {user.id} {'liked' if liked else 'unliked'} property {property_obj.id}"
        )
        return liked
