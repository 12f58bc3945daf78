"""
Form descriptors for the dashboard's data-entry screens.

These are presentation-only: they describe which inputs a client renders and
collect the raw values a submission carries. Validation happens in the
actions, never here.
"""

from pydantic import BaseModel, Field
from typing import Any, List, Mapping, Optional
from app.models.invoice import Invoice, InvoiceStatus
from app.models.property import Property, LettingStatus, ComplianceStatus


class FormOption(BaseModel):
    """One choice of a radio or select input."""

    value: str
    label: str


class FormField(BaseModel):
    """A single input of a data-entry form."""

    name: str = Field(..., description="Field name submitted with the form")
    label: str = Field(..., description="Label shown next to the input")
    input_type: str = Field("text", description="text, number, url or radio")
    required: bool = True
    placeholder: Optional[str] = None
    step: Optional[str] = None
    options: List[FormOption] = Field(default_factory=list)
    value: Optional[str] = Field(None, description="Pre-filled value for edit forms")


class FormDescriptor(BaseModel):
    """A complete form: its inputs and where it submits."""

    title: str
    action: str
    method: str = "post"
    submit_label: str
    cancel_href: str
    fields: List[FormField]


INVOICE_FIELDS: List[FormField] = [
    FormField(name="customerId", label="Choose customer", placeholder="Select a customer"),
    FormField(
        name="amount",
        label="Choose an amount",
        input_type="number",
        step="0.01",
        placeholder="Enter USD amount",
    ),
    FormField(
        name="status",
        label="Set the invoice status",
        input_type="radio",
        options=[
            FormOption(value=InvoiceStatus.PENDING.value, label="Pending"),
            FormOption(value=InvoiceStatus.PAID.value, label="Paid"),
        ],
    ),
]

PROPERTY_FIELDS: List[FormField] = [
    FormField(name="title", label="Property Title", placeholder="Enter Property Title"),
    FormField(name="address", label="Property Address", placeholder="Enter Property Address"),
    FormField(name="imageUrl", label="Property Image URL", input_type="url", placeholder="Enter Property Image URL"),
    FormField(
        name="monthlyRent",
        label="Property Monthly Rent",
        input_type="number",
        step="0.01",
        placeholder="Enter Property Monthly Rent",
    ),
    FormField(
        name="tenants",
        label="Property Number of Tenants",
        input_type="number",
        step="1",
        placeholder="Enter Property Number of Tenants",
    ),
    FormField(
        name="lettingStatus",
        label="What is the current property letting status?",
        input_type="radio",
        options=[
            FormOption(value=LettingStatus.LET.value, label="Let"),
            FormOption(value=LettingStatus.NOT_LET.value, label="Not Let"),
        ],
    ),
    FormField(
        name="complianceStatus",
        label="What is the current compliance status?",
        input_type="radio",
        options=[
            FormOption(value=ComplianceStatus.COMPLETE.value, label="Complete"),
            FormOption(value=ComplianceStatus.PENDING.value, label="Pending"),
        ],
    ),
]


def collect_form_values(form: Mapping[str, Any], fields: List[FormField]) -> dict:
    """
    Pick the raw values of the given fields out of a submission.

    Missing fields map to None. Values are handed on unvalidated.
    """
    return {field.name: form.get(field.name) for field in fields}


def _prefill(fields: List[FormField], values: Mapping[str, Any]) -> List[FormField]:
    return [field.model_copy(update={"value": values.get(field.name)}) for field in fields]


def invoice_form(listing_path: str, invoice: Optional[Invoice] = None) -> FormDescriptor:
    """Build the create form, or the edit form pre-filled from an invoice."""
    if invoice is None:
        return FormDescriptor(
            title="Create Invoice",
            action=listing_path,
            submit_label="Create Invoice",
            cancel_href=listing_path,
            fields=[field.model_copy() for field in INVOICE_FIELDS],
        )

    values = {
        "customerId": invoice.customer_id,
        "amount": f"{invoice.amount_in_dollars:.2f}",
        "status": invoice.status.value,
    }
    return FormDescriptor(
        title="Edit Invoice",
        action=f"{listing_path}/{invoice.id}",
        submit_label="Edit Invoice",
        cancel_href=listing_path,
        fields=_prefill(INVOICE_FIELDS, values),
    )


def property_form(listing_path: str, property_obj: Optional[Property] = None) -> FormDescriptor:
    """Build the create form, or the edit form pre-filled from a property."""
    if property_obj is None:
        return FormDescriptor(
            title="Create Property",
            action=listing_path,
            submit_label="Create Property",
            cancel_href=listing_path,
            fields=[field.model_copy() for field in PROPERTY_FIELDS],
        )

    values = {
        "title": property_obj.title,
        "address": property_obj.address,
        "imageUrl": property_obj.image_url,
        "monthlyRent": str(property_obj.monthly_rent),
        "tenants": str(property_obj.tenants),
        "lettingStatus": property_obj.letting_status.value,
        "complianceStatus": property_obj.compliance_status.value,
    }
    return FormDescriptor(
        title="Edit Property",
        action=f"{listing_path}/{property_obj.id}",
        submit_label="Edit Property",
        cancel_href=listing_path,
        fields=_prefill(PROPERTY_FIELDS, values),
    )
