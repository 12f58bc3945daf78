"""
Pydantic schemas for invoice form submissions and responses.
Form schemas read the dashboard's camelCase field names and coerce raw strings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import List, Optional
from datetime import date as date_type, datetime
from decimal import Decimal, ROUND_HALF_UP
from app.models.invoice import InvoiceStatus
from app.utils.validators import FormCoercion, INTEGER_COLUMN_MAX

# Invoice amounts are stored as cents in a 32-bit INTEGER column
MAX_AMOUNT_CENTS = INTEGER_COLUMN_MAX
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / 100


def to_cents(amount: Decimal) -> int:
    """Dollars to integer cents, rounded half up."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """
    Schema for creating or replacing an invoice.
    The invoice date is never accepted from input.
    """

    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(
        ...,
        alias="customerId",
        description="Identifier of the billed customer",
        examples=["3958dc9e-712f-4377-85e9-fec4b6a6442a"]
    )

    amount: Decimal = Field(
        ...,
        description="Invoice amount in dollars",
        examples=["125.50"]
    )

    status: InvoiceStatus = Field(
        ...,
        description="Payment status - pending or paid",
        examples=["pending"]
    )

    @field_validator("customer_id", mode="before")
    @classmethod
    def validate_customer_id(cls, v):
        """Require a non-empty customer identifier."""
        customer_id = FormCoercion.to_text(v)
        if customer_id is None:
            raise PydanticCustomError("customer_required", "Please select a customer.")
        return customer_id

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        """Coerce amount to a number whose cents are positive and fit the amount column."""
        if FormCoercion.is_blank(v):
            raise PydanticCustomError("amount_too_small", "Please enter an amount greater than $0.")

        amount = FormCoercion.to_decimal(v)
        if amount is None or amount > MAX_AMOUNT:
            raise PydanticCustomError("amount_invalid", "Please enter a valid amount.")
        if amount <= 0 or to_cents(amount) <= 0:
            raise PydanticCustomError("amount_too_small", "Please enter an amount greater than $0.")
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        """Restrict status to the closed set of invoice statuses."""
        try:
            return InvoiceStatus(v.strip() if isinstance(v, str) else v)
        except (ValueError, TypeError):
            raise PydanticCustomError("status_invalid", "Please select an invoice status.")

    @property
    def amount_in_cents(self) -> int:
        """Amount converted to integer cents, rounded half up."""
        return to_cents(self.amount)

    def to_record(self) -> dict:
        """Column values for the invoices table, excluding the server-side date."""
        return {
            "customer_id": self.customer_id,
            "amount": self.amount_in_cents,
            "status": self.status,
        }


class InvoiceResponse(BaseModel):
    """Schema for invoice response data."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Invoice unique identifier")
    customer_id: str = Field(..., description="Identifier of the billed customer")
    amount: int = Field(..., description="Invoice amount in cents")
    status: InvoiceStatus = Field(..., description="Payment status")
    date: date_type = Field(..., description="Invoice date")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")


class InvoiceListResponse(BaseModel):
    """Schema for the invoices listing."""

    invoices: List[InvoiceResponse] = Field(..., description="Invoices, newest first")
    total: int = Field(..., description="Number of invoices")
