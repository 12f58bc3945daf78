"""
Property repository for the dashboard's rental listings.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.property import Property


class PropertyRepository(BaseRepository[Property]):
    """Repository for rental properties."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)
