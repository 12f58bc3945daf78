"""
Invoice model for customer billing records.
Amounts are stored as integer cents; the invoice date is set server-side at creation.
"""

from sqlalchemy import String, Integer, Date, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from decimal import Decimal
import datetime
import enum


class InvoiceStatus(str, enum.Enum):
    """Invoice payment status."""
    PENDING = "pending"
    PAID = "paid"


class Invoice(Base):
    """
    Invoice model for the dashboard's billing listing.
    Flat record with no invariants beyond field typing.
    """

    __tablename__ = "invoices"

    customer_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Identifier of the billed customer"
    )

    amount: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Invoice amount in cents"
    )

    status: Mapped[InvoiceStatus] = mapped_column(
        SQLEnum(InvoiceStatus, values_callable=lambda enum_cls: [member.value for member in enum_cls]),
        nullable=False,
        index=True,
        comment="Payment status - pending or paid"
    )

    date: Mapped[datetime.date] = mapped_column(
        Date,
        nullable=False,
        comment="Invoice date, generated when the invoice is created"
    )

    def __repr__(self) -> str:
        """String representation of the invoice."""
        return f"<Invoice(id={self.id}, customer_id={self.customer_id}, amount={self.amount}, status={self.status})>"

    @property
    def amount_in_dollars(self) -> Decimal:
        return Decimal(self.amount) / 100

    def to_dict(self) -> dict:
        """
        Convert invoice to dictionary.

        Returns:
            Dictionary representation of invoice
        """
        return {
            "id": str(self.id),
            "customer_id": self.customer_id,
            "amount": self.amount,
            "status": self.status.value,
            "date": self.date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


# Listing is ordered newest first, filtered by status on the dashboard
status_date_index = Index(
    'idx_invoices_status_date',
    Invoice.status,
    Invoice.date.desc()
)
