"""
Repository layer for data access operations.
Each mutation is a single parameterized statement behind the RecordStore port.
"""

from app.repositories.base import BaseRepository, RecordStore
from app.repositories.invoice import InvoiceRepository
from app.repositories.property import PropertyRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "RecordStore",
    "InvoiceRepository",
    "PropertyRepository",
    "UserRepository"
]
