"""
Pydantic schemas for property requests and responses.
Handles listing CRUD payloads, the filter request and the watchlist actions.
"""

from pydantic import ConfigDict, Field, model_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from app.schemas.response import CamelModel
from app.schemas.user import OwnerContact


class PropertyBase(CamelModel):
    """Base property schema with common fields."""

    model_config = ConfigDict(str_strip_whitespace=True)

    property_type: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Kind of property",
        examples=["Flat"]
    )

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Listing title",
        examples=["2BHK near Andheri station"]
    )

    state: str = Field(..., min_length=1, max_length=100, examples=["Maharashtra"])
    city: str = Field(..., min_length=1, max_length=100, examples=["Mumbai"])
    local_area: str = Field(..., min_length=1, max_length=255, examples=["Andheri West"])

    bedrooms: int = Field(..., ge=0, le=50, description="Number of bedrooms", examples=[2])
    bathrooms: int = Field(..., ge=0, le=50, description="Number of bathrooms", examples=[2])

    bachelors_allowed: bool = Field(
        False,
        description="Whether bachelors may rent the property"
    )

    nearby_railway_station_distance: float = Field(
        ...,
        ge=0,
        description="Distance to the nearest railway station",
        examples=[1.5]
    )

    nearby_hospital_distance: float = Field(
        ...,
        ge=0,
        description="Distance to the nearest hospital",
        examples=[0.8]
    )

    price: float = Field(
        ...,
        gt=0,
        le=999999999.99,
        description="Asking price",
        examples=[25000]
    )


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "propertyType": "Flat",
                "title": "2BHK near Andheri station",
                "state": "Maharashtra",
                "city": "Mumbai",
                "localArea": "Andheri West",
                "bedrooms": 2,
                "bathrooms": 2,
                "bachelorsAllowed": True,
                "nearbyRailwayStationDistance": 1.5,
                "nearbyHospitalDistance": 0.8,
                "price": 25000
            }
        }
    )


class PropertyUpdate(CamelModel):
    """Schema for updating an existing property. Only supplied fields change."""

    model_config = ConfigDict(str_strip_whitespace=True)

    property_type: Optional[str] = Field(None, min_length=1, max_length=100)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    local_area: Optional[str] = Field(None, min_length=1, max_length=255)
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[int] = Field(None, ge=0, le=50)
    bachelors_allowed: Optional[bool] = None
    nearby_railway_station_distance: Optional[float] = Field(None, ge=0)
    nearby_hospital_distance: Optional[float] = Field(None, ge=0)
    price: Optional[float] = Field(None, gt=0, le=999999999.99)


class PropertyFilterRequest(CamelModel):
    """Filter request; propertyType, state and city are mandatory."""

    model_config = ConfigDict(str_strip_whitespace=True)

    property_type: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    bachelors_allowed: Optional[bool] = None
    min_price: Optional[float] = Field(None, ge=0, description="Inclusive lower price bound")
    max_price: Optional[float] = Field(None, ge=0, description="Inclusive upper price bound")

    @model_validator(mode="after")
    def validate_price_range(self):
        """Validate that the price bounds are ordered."""
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("minPrice cannot be greater than maxPrice")
        return self


class SendOwnerInfoRequest(CamelModel):
    """Ask for the owner's contact details to be emailed to a buyer."""

    property_id: UUID
    buyer_id: UUID


class ToggleLikeRequest(CamelModel):
    """Add a property to, or remove it from, a user's watchlist."""

    property_id: UUID
    user_id: UUID


class PropertyResponse(CamelModel):
    """Full listing representation."""

    id: str
    property_type: str
    title: str
    state: str
    city: str
    local_area: str
    bedrooms: int
    bathrooms: int
    bachelors_allowed: bool
    nearby_railway_station_distance: float
    nearby_hospital_distance: float
    price: float
    owner: str = Field(..., description="Owner's user ID")
    likes: List[str] = Field(default_factory=list, description="IDs of users who liked the listing")
    created_at: datetime
    updated_at: datetime


class PropertyWithOwnerResponse(PropertyResponse):
    """Listing with the owner's contact details expanded, used by the filter endpoint."""

    owner: OwnerContact


class PropertyDetailResponse(CamelModel):
    """Public listing details without identifiers, owner, likes or timestamps."""

    property_type: str
    title: str
    state: str
    city: str
    local_area: str
    bedrooms: int
    bathrooms: int
    bachelors_allowed: bool
    nearby_railway_station_distance: float
    nearby_hospital_distance: float
    price: float
