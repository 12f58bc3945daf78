"""
Invoice repository for the dashboard's billing records.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.invoice import Invoice


class InvoiceRepository(BaseRepository[Invoice]):
    """Repository for invoices; the listing is ordered by invoice date, newest first."""

    def __init__(self, db: AsyncSession):
        super().__init__(Invoice, db)

    def default_order_by(self) -> list:
        return [Invoice.date.desc(), Invoice.created_at.desc()]
