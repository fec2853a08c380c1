"""
Property service for managing listings with ownership checks.
Handles CRUD operations, filtering, the owner contact exchange and the watchlist.
"""

from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.user import UserRepository
from app.models.property import Property
from app.models.user import User
from app.schemas.property import PropertyCreate, PropertyUpdate, PropertyFilterRequest
from app.services.email import EmailDeliveryError, EmailService
from app.utils.exceptions import (
    InternalServerError,
    NotFoundError,
    PropertyNotFoundError,
    PropertyOwnershipError
)
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for listing management.
    Only a listing's owner may change or remove it.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def create_property(self, property_data: PropertyCreate, current_user: User) -> Property:
        """
        Create a new listing owned by the current user.

        Args:
            property_data: Property creation data
            current_user: User posting the property

        Returns:
            Created property instance
        """
        property_obj = await self.property_repo.create_property(
            property_data.model_dump(),
            owner_id=current_user.id
        )
        logger.info(f"Property created by user {current_user.email}: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def get_user_properties(self, current_user: User) -> List[Property]:
        """Get every listing posted by the current user."""
        properties = await self.property_repo.get_by_owner(current_user.id)
        logger.debug(f"User {current_user.id} has {len(properties)} properties")
        return properties

    async def get_property(self, property_id: uuid.UUID) -> Property:
        """
        Get property by ID.

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError()
        return property_obj

    async def update_property(
        self,
        property_id: uuid.UUID,
        property_data: PropertyUpdate,
        current_user: User
    ) -> Property:
        """
        Update a listing's supplied fields.

        Args:
            property_id: UUID of the property to update
            property_data: Partial update data
            current_user: User updating the property

        Returns:
            Updated property instance

        Raises:
            PropertyNotFoundError: If property doesn't exist
            PropertyOwnershipError: If the user does not own the property
        """
        property_obj = await self.get_property(property_id)

        if not self._can_manage_property(property_obj, current_user):
            logger.warning(f"User {current_user.id} attempted to update property {property_id}")
            raise PropertyOwnershipError("update")

        update_data = property_data.model_dump(exclude_unset=True)
        updated_property = await self.property_repo.update(property_obj, update_data)

        logger.info(f"Property updated by user {current_user.email}: {property_id}")
        return updated_property

    async def delete_property(self, property_id: uuid.UUID, current_user: User) -> None:
        """
        Delete a listing and its likes.

        Raises:
            PropertyNotFoundError: If property doesn't exist
            PropertyOwnershipError: If the user does not own the property
        """
        property_obj = await self.get_property(property_id)

        if not self._can_manage_property(property_obj, current_user):
            logger.warning(f"User {current_user.id} attempted to delete property {property_id}")
            raise PropertyOwnershipError("delete")

        await self.property_repo.delete_property(property_obj)
        logger.info(f"Property deleted by user {current_user.email}: {property_id}")

    async def filter_properties(self, filters: PropertyFilterRequest) -> List[Property]:
        """Find listings matching the filter request."""
        return await self.property_repo.filter_properties(self._convert_filters(filters))

    async def send_owner_info(
        self,
        property_id: uuid.UUID,
        buyer_id: uuid.UUID,
        email_service: EmailService
    ) -> None:
        """
        Email the owner's contact details to the buyer and the buyer's to the owner.

        Raises:
            NotFoundError: If the property or the buyer doesn't exist
            InternalServerError: If an email could not be delivered
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        buyer = await self.user_repo.get_by_id(buyer_id)

        if not property_obj or not buyer:
            raise NotFoundError("Property or buyer not found")

        try:
            await email_service.send_owner_info(property_obj, buyer)
        except EmailDeliveryError:
            logger.error(f"Owner info exchange failed for property {property_id}")
            raise InternalServerError("Error sending email")

        logger.info(f"Owner info for property {property_id} sent to buyer {buyer_id}")

    async def toggle_like(self, property_id: uuid.UUID, user_id: uuid.UUID) -> Tuple[Property, bool]:
        """
        Add the listing to the user's watchlist, or remove it if already there.

        Returns:
            Tuple of (property, whether it is now liked)

        Raises:
            NotFoundError: If the property or the user doesn't exist
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        user = await self.user_repo.get_by_id(user_id)

        if not property_obj or not user:
            raise NotFoundError("Property or user not found")

        liked = await self.property_repo.toggle_like(property_obj, user)
        return property_obj, liked

    async def get_watchlist(self, current_user: User) -> List[Property]:
        """Get the listings the current user has liked."""
        return await self.property_repo.get_watchlist(current_user.id)

    def _can_manage_property(self, property_obj: Property, user: User) -> bool:
        """Check if the user may modify or delete the property."""
        return property_obj.is_owned_by(user.id)

    def _convert_filters(self, filters: PropertyFilterRequest) -> PropertySearchFilters:
        """Convert the request schema to repository filter criteria."""
        return PropertySearchFilters(
            property_type=filters.property_type,
            state=filters.state,
            city=filters.city,
            bedrooms=filters.bedrooms,
            bathrooms=filters.bathrooms,
            bachelors_allowed=filters.bachelors_allowed,
            min_price=filters.min_price,
            max_price=filters.max_price
        )
