"""
Repository layer for data access operations.
Wraps the async session behind model-specific query helpers.
"""

from app.repositories.base import BaseRepository
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "PropertySearchFilters",
    "UserRepository"
]
