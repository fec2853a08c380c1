"""
Database models for the Rentify API.
Includes User and Property models and the like association table.
"""

from app.models.like import property_likes
from app.models.user import User, UserType
from app.models.property import Property

# Export all models for easy importing
__all__ = [
    "User",
    "UserType",
    "Property",
    "property_likes",
]
