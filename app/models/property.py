"""
Property model for rental listings.
Handles listing data with location, pricing, ownership and likes.
"""

from sqlalchemy import String, Integer, Float, Numeric, Boolean, Index, ForeignKey, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from app.models.like import property_likes
from decimal import Decimal
import uuid
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User


class Property(Base):
    """
    Property model for managing listings.
    Every listing belongs to exactly one owner, who alone may change it.
    """

    __tablename__ = "properties"

    property_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Kind of property, e.g. Flat or House"
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Location information
    state: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    local_area: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Property specifications
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)

    bachelors_allowed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    nearby_railway_station_distance: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Distance to the nearest railway station"
    )

    nearby_hospital_distance: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Distance to the nearest hospital"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True,
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who posted this listing"
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", lazy="selectin")

    liked_by: Mapped[List["User"]] = relationship(
        "User",
        secondary=property_likes,
        back_populates="liked_properties",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check whether the given user owns this listing."""
        return self.owner_id == user_id

    def is_liked_by(self, user_id: uuid.UUID) -> bool:
        """Check whether the given user has this listing on their watchlist."""
        return any(user.id == user_id for user in self.liked_by)

    def to_dict(self, include_owner: bool = False) -> dict:
        """
        Convert property to dictionary.

        Args:
            include_owner: Whether to expand the owner into contact details

        Returns:
            Dictionary representation of property
        """
        return {
            "id": str(self.id),
            "property_type": self.property_type,
            "title": self.title,
            "state": self.state,
            "city": self.city,
            "local_area": self.local_area,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "bachelors_allowed": self.bachelors_allowed,
            "nearby_railway_station_distance": self.nearby_railway_station_distance,
            "nearby_hospital_distance": self.nearby_hospital_distance,
            "price": float(self.price),
            "owner": self.owner.to_contact_dict() if include_owner else str(self.owner_id),
            "likes": [str(user.id) for user in self.liked_by],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


# Composite index for the filter endpoint's required fields
search_index = Index(
    "idx_properties_type_state_city",
    Property.property_type,
    Property.state,
    Property.city,
)

# Composite index for price range filtering within a city
city_price_index = Index(
    "idx_properties_city_price",
    Property.city,
    Property.price,
)
