"""
Tests for the form descriptors shown on the data-entry screens.
"""

import uuid
from datetime import date
from decimal import Decimal

from app.models.invoice import Invoice, InvoiceStatus
from app.models.property import Property, LettingStatus, ComplianceStatus
from app.schemas.forms import (
    INVOICE_FIELDS,
    PROPERTY_FIELDS,
    collect_form_values,
    invoice_form,
    property_form
)


def test_create_invoice_form():
    form = invoice_form("/api/v1/dashboard/invoices")

    assert form.title == "Create Invoice"
    assert form.action == "/api/v1/dashboard/invoices"
    assert form.cancel_href == "/api/v1/dashboard/invoices"
    assert all(field.value is None for field in form.fields)

    status = next(field for field in form.fields if field.name == "status")
    assert [option.value for option in status.options] == ["pending", "paid"]


def test_edit_invoice_form_prefilled():
    invoice = Invoice(
        id=uuid.uuid4(),
        customer_id="customer-1",
        amount=4205,
        status=InvoiceStatus.PAID,
        date=date(2024, 3, 1)
    )

    form = invoice_form("/dashboard/invoices", invoice)

    assert form.action == f"/dashboard/invoices/{invoice.id}"
    values = {field.name: field.value for field in form.fields}
    assert values == {"customerId": "customer-1", "amount": "42.05", "status": "paid"}
    assert all(field.value is None for field in INVOICE_FIELDS)


def test_edit_invoice_form_prefills_exact_dollars():
    invoice = Invoice(
        id=uuid.uuid4(),
        customer_id="customer-1",
        amount=2147483647,
        status=InvoiceStatus.PENDING,
        date=date(2024, 3, 1)
    )

    form = invoice_form("/dashboard/invoices", invoice)

    assert invoice.amount_in_dollars == Decimal("21474836.47")
    amount = next(field for field in form.fields if field.name == "amount")
    assert amount.value == "21474836.47"


def test_property_form_letting_options_are_two_states():
    form = property_form("/dashboard/properties")

    letting = next(field for field in form.fields if field.name == "lettingStatus")
    assert {option.value for option in letting.options} == {"let", "not_let"}


def test_edit_property_form_prefilled():
    property_obj = Property(
        id=uuid.uuid4(),
        title="Studio",
        address="3 High Street",
        image_url="/properties/studio.png",
        monthly_rent=Decimal("800.00"),
        tenants=1,
        letting_status=LettingStatus.NOT_LET,
        compliance_status=ComplianceStatus.COMPLETE
    )

    form = property_form("/dashboard/properties", property_obj)
    values = {field.name: field.value for field in form.fields}

    assert form.submit_label == "Edit Property"
    assert values["monthlyRent"] == "800.00"
    assert values["tenants"] == "1"
    assert values["lettingStatus"] == "not_let"
    assert values["complianceStatus"] == "complete"


def test_collect_form_values_passes_raw_values_through():
    submitted = {"title": "  Flat ", "tenants": "many", "unexpected": "x"}

    values = collect_form_values(submitted, PROPERTY_FIELDS)

    assert values["title"] == "  Flat "
    assert values["tenants"] == "many"
    assert values["address"] is None
    assert "unexpected" not in values
