"""
Property model for rental listings on the dashboard.
Handles rent, tenancy and compliance data for each managed property.
"""

from sqlalchemy import String, Integer, Numeric, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from decimal import Decimal
import enum


class LettingStatus(str, enum.Enum):
    """Whether the property is currently let."""
    LET = "let"
    NOT_LET = "not_let"


class ComplianceStatus(str, enum.Enum):
    """Compliance check status for a rental property."""
    PENDING = "pending"
    COMPLETE = "complete"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Property(Base):
    """
    Property model for managing rental listings.
    Full-record replace on update; no partial patch semantics.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property listing title"
    )

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property address"
    )

    image_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        comment="URL or path of the property image"
    )

    monthly_rent: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Monthly rent in local currency"
    )

    tenants: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of tenants"
    )

    letting_status: Mapped[LettingStatus] = mapped_column(
        SQLEnum(LettingStatus, values_callable=_enum_values),
        nullable=False,
        index=True,
        comment="Letting status - let or not_let"
    )

    compliance_status: Mapped[ComplianceStatus] = mapped_column(
        SQLEnum(ComplianceStatus, values_callable=_enum_values),
        nullable=False,
        index=True,
        comment="Compliance status - pending or complete"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}..., monthly_rent={self.monthly_rent})>"

    @property
    def is_let(self) -> bool:
        return self.letting_status == LettingStatus.LET

    def to_dict(self) -> dict:
        """
        Convert property to dictionary.

        Returns:
            Dictionary representation of property
        """
        return {
            "id": str(self.id),
            "title": self.title,
            "address": self.address,
            "image_url": self.image_url,
            "monthly_rent": float(self.monthly_rent),
            "tenants": self.tenants,
            "letting_status": self.letting_status.value,
            "compliance_status": self.compliance_status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


# Composite index for the dashboard's status filters
status_index = Index(
    'idx_properties_letting_compliance',
    Property.letting_status,
    Property.compliance_status
)
