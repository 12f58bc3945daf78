"""
Pydantic schemas for property form submissions and responses.
Handles coercion of rent, tenant count and the two status fields.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import List, Optional
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from app.models.property import LettingStatus, ComplianceStatus
from app.utils.validators import FormCoercion, INTEGER_COLUMN_MAX


# Radio inputs historically posted booleans for the letting status
LETTING_STATUS_ALIASES = {
    "true": LettingStatus.LET,
    "false": LettingStatus.NOT_LET,
    "not-let": LettingStatus.NOT_LET,
}

# Largest value the NUMERIC(12, 2) rent column holds
MAX_MONTHLY_RENT = Decimal("9999999999.99")


def _required_text(value, code: str, message: str) -> str:
    text = FormCoercion.to_text(value)
    if text is None:
        raise PydanticCustomError(code, message)
    return text


class PropertyForm(BaseModel):
    """
    Schema for creating or fully replacing a property.
    Every field is required on both create and update.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(
        ...,
        max_length=255,
        description="Property listing title",
        examples=["Two-bed flat on Mill Road"]
    )

    address: str = Field(
        ...,
        max_length=255,
        description="Property address",
        examples=["12 Mill Road, Cambridge CB1 2AD"]
    )

    image_url: str = Field(
        ...,
        alias="imageUrl",
        max_length=2048,
        description="URL or path of the property image",
        examples=["/properties/mill-road.png"]
    )

    monthly_rent: Decimal = Field(
        ...,
        alias="monthlyRent",
        description="Monthly rent in local currency",
        examples=["1450.00"]
    )

    tenants: int = Field(
        ...,
        description="Number of tenants",
        examples=[2]
    )

    letting_status: LettingStatus = Field(
        ...,
        alias="lettingStatus",
        description="Letting status - let or not_let",
        examples=["let"]
    )

    compliance_status: ComplianceStatus = Field(
        ...,
        alias="complianceStatus",
        description="Compliance status - pending or complete",
        examples=["pending"]
    )

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v):
        return _required_text(v, "title_required", "Please enter a property title.")

    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v):
        return _required_text(v, "address_required", "Please enter a property address.")

    @field_validator("image_url", mode="before")
    @classmethod
    def validate_image_url(cls, v):
        return _required_text(v, "image_url_required", "Please provide a property image URL.")

    @field_validator("monthly_rent", mode="before")
    @classmethod
    def validate_monthly_rent(cls, v):
        """Coerce rent to a non-negative, two-place amount that fits the rent column."""
        rent = FormCoercion.to_decimal(v)
        if rent is None or rent < 0 or rent > MAX_MONTHLY_RENT:
            raise PydanticCustomError("monthly_rent_invalid", "Please enter a valid monthly rent.")
        return rent.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    @field_validator("tenants", mode="before")
    @classmethod
    def validate_tenants(cls, v):
        """Coerce tenants to a non-negative whole number."""
        tenants = FormCoercion.to_int(v, maximum=INTEGER_COLUMN_MAX)
        if tenants is None or tenants < 0:
            raise PydanticCustomError("tenants_invalid", "Please enter a valid number of tenants.")
        return tenants

    @field_validator("letting_status", mode="before")
    @classmethod
    def validate_letting_status(cls, v):
        """Accept the two letting states, including boolean-style radio values."""
        if isinstance(v, LettingStatus):
            return v
        raw = v.strip().lower() if isinstance(v, str) else v
        if isinstance(raw, str) and raw in LETTING_STATUS_ALIASES:
            return LETTING_STATUS_ALIASES[raw]
        try:
            return LettingStatus(raw)
        except (ValueError, TypeError):
            raise PydanticCustomError("letting_status_invalid", "Please select a letting status.")

    @field_validator("compliance_status", mode="before")
    @classmethod
    def validate_compliance_status(cls, v):
        try:
            return ComplianceStatus(v.strip() if isinstance(v, str) else v)
        except (ValueError, TypeError):
            raise PydanticCustomError("compliance_status_invalid", "Please select a compliance status.")

    def to_record(self) -> dict:
        """Column values for the properties table."""
        return {
            "title": self.title,
            "address": self.address,
            "image_url": self.image_url,
            "monthly_rent": self.monthly_rent,
            "tenants": self.tenants,
            "letting_status": self.letting_status,
            "compliance_status": self.compliance_status,
        }


class PropertyResponse(BaseModel):
    """Schema for property response data."""

    id: str = Field(..., description="Property unique identifier")
    title: str = Field(..., description="Property listing title")
    address: str = Field(..., description="Property address")
    image_url: str = Field(..., description="URL or path of the property image")
    monthly_rent: float = Field(..., description="Monthly rent")
    tenants: int = Field(..., description="Number of tenants")
    letting_status: LettingStatus = Field(..., description="Letting status")
    compliance_status: ComplianceStatus = Field(..., description="Compliance status")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")


class PropertyListResponse(BaseModel):
    """Schema for the properties listing."""

    properties: List[PropertyResponse] = Field(..., description="Properties, newest first")
    total: int = Field(..., description="Number of properties")
