"""
Base repository class with the dashboard's CRUD operations using async SQLAlchemy.
Every mutating call issues exactly one parameterized statement and commits it.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, update, delete, func
from app.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type, Protocol
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class RecordStore(Protocol[ModelType]):
    """
    Persistence port used by the form actions.
    Implemented by the SQLAlchemy repositories and by in-memory stores in tests.
    """

    async def create(self, obj_in: Dict[str, Any]) -> uuid.UUID:
        ...

    async def update(self, id: uuid.UUID, obj_in: Dict[str, Any]) -> bool:
        ...

    async def delete(self, id: uuid.UUID) -> bool:
        ...

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        ...

    async def get_multi(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        ...


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Uses async SQLAlchemy for all database operations with rollback on failure.
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

    async def create(self, obj_in: Dict[str, Any]) -> uuid.UUID:
        """
        Insert a new record with a single INSERT statement.

        Args:
            obj_in: Dictionary of column values for the new record

        Returns:
            Identifier of the created record

        Raises:
            Exception: If database operation fails
        """
        values = dict(obj_in)
        record_id = values.pop("id", None) or uuid.uuid4()

        try:
            await self.db.execute(insert(self.model).values(id=record_id, **values))
            await self.db.commit()
            logger.debug(f"Created {self.model.__name__} with id: {record_id}")
            return record_id
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: UUID of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        try:
            query = select(self.model).where(self.model.id == id).execution_options(populate_existing=True)
            result = await self.db.execute(query)
            obj = result.scalar_one_or_none()

            if obj:
                logger.debug(f"Retrieved {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found")

            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by id {id}: {e}")
            raise

    async def get_multi(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """
        Get records newest first with pagination.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of model instances
        """
        try:
            query = (
                select(self.model)
                .order_by(*self.default_order_by())
                .offset(skip)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            objects = result.scalars().all()

            logger.debug(f"Retrieved {len(objects)} {self.model.__name__} records")
            return list(objects)
        except Exception as e:
            logger.error(f"Failed to get multiple {self.model.__name__} records: {e}")
            raise

    def default_order_by(self) -> list:
        return [self.model.created_at.desc()]

    async def update(self, id: uuid.UUID, obj_in: Dict[str, Any]) -> bool:
        """
        Replace a record's columns with a single UPDATE statement.

        Args:
            id: UUID of the record to update
            obj_in: Full set of column values

        Returns:
            True if a row was updated, False if no record has this id

        Raises:
            Exception: If database operation fails
        """
        try:
            stmt = (
                update(self.model)
                .where(self.model.id == id)
                .values(**obj_in)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()

            updated = result.rowcount > 0
            if updated:
                logger.debug(f"Updated {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found for update")

            return updated
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {id}: {e}")
            raise

    async def delete(self, id: uuid.UUID) -> bool:
        """
        Delete a record by its ID with a single DELETE statement.

        Args:
            id: UUID of the record to delete

        Returns:
            True if record was deleted, False if not found

        Raises:
            Exception: If database operation fails
        """
        try:
            stmt = (
                delete(self.model)
                .where(self.model.id == id)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()

            deleted = result.rowcount > 0
            if deleted:
                logger.debug(f"Deleted {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found for deletion")

            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {id}: {e}")
            raise

    async def count(self) -> int:
        """
        Count all records.

        Returns:
            Number of records
        """
        try:
            result = await self.db.execute(select(func.count(self.model.id)))
            count = result.scalar()

            logger.debug(f"Counted {count} {self.model.__name__} records")
            return count
        except Exception as e:
            logger.error(f"Failed to count {self.model.__name__} records: {e}")
            raise
