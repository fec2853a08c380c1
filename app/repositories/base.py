"""
Base repository class with common CRUD operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from app.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Writes commit on success and roll back the session on failure.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def save(self, db_obj: ModelType) -> ModelType:
        """
        Add an instance to the session, commit and reload server-side values.

        Args:
            db_obj: New or modified model instance

        Returns:
            The refreshed instance
        """
        try:
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to save {self.model.__name__}: {e}")
            raise

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance
        """
        db_obj = await self.save(self.model(**obj_in))
        logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
        return db_obj

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: UUID of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        return await self.get_by_field("id", id)

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """
        Get a record by a specific field value.

        Args:
            field: Field name to search by
            value: Value to search for

        Returns:
            Model instance if found, None otherwise
        """
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")

        try:
            query = select(self.model).where(getattr(self.model, field) == value)
            result = await self.db.execute(query)
            obj = result.scalar_one_or_none()

            if obj:
                logger.debug(f"Retrieved {self.model.__name__} by {field}: {value}")
            else:
                logger.debug(f"{self.model.__name__} with {field}={value} not found")

            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by {field}={value}: {e}")
            raise

    async def get_multi_by_field(self, field: str, value: Any) -> List[ModelType]:
        """
        Get every record whose field equals the given value, newest first.

        Args:
            field: Field name to search by
            value: Value to search for

        Returns:
            List of model instances
        """
        try:
            query = (
                select(self.model)
                .where(getattr(self.model, field) == value)
                .order_by(self.model.created_at.desc())
            )
            result = await self.db.execute(query)
            objects = result.scalars().all()

            logger.debug(f"Retrieved {len(objects)} {self.model.__name__} records by {field}")
            return list(objects)
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} records by {field}={value}: {e}")
            raise

    async def update(self, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """
        Apply field values to a loaded instance and persist them.

        None values are skipped so partial payloads leave other fields untouched.

        Args:
            db_obj: Instance to update
            obj_in: Dictionary of field values to update

        Returns:
            Updated model instance
        """
        update_data = {k: v for k, v in obj_in.items() if v is not None}

        if not update_data:
            logger.warning(f"No valid data provided for updating {self.model.__name__} {db_obj.id}")
            return db_obj

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        db_obj = await self.save(db_obj)
        logger.debug(f"Updated {self.model.__name__} with id: {db_obj.id}")
        return db_obj

    async def delete(self, db_obj: ModelType) -> None:
        """
        Delete a loaded instance.

        Args:
            db_obj: Instance to delete
        """
        obj_id = db_obj.id
        try:
            await self.db.delete(db_obj)
            await self.db.commit()
            logger.debug(f"Deleted {self.model.__name__} with id: {obj_id}")
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {obj_id}: {e}")
            raise

    async def count(self) -> int:
        """Count all records of this model."""
        result = await self.db.execute(select(func.count(self.model.id)))
        return result.scalar()

    async def exists(self, field: str, value: Any) -> bool:
        """
        Check whether any record has the given field value.

        Args:
            field: Field name to check
            value: Value to look for

        Returns:
            True if a record exists, False otherwise
        """
        query = select(func.count(self.model.id)).where(getattr(self.model, field) == value)
        result = await self.db.execute(query)
        exists = result.scalar() > 0
        logger.debug(f"{self.model.__name__} with {field}={value} exists: {exists}")
        return exists
