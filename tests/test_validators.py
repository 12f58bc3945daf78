"""
Tests for form coercion and the invoice and property form schemas.
"""

import pytest
from decimal import Decimal

from app.models.invoice import InvoiceStatus
from app.models.property import LettingStatus, ComplianceStatus
from app.schemas.invoice import InvoiceForm
from app.schemas.property import MAX_MONTHLY_RENT, PropertyForm
from app.utils.validators import FormCoercion, INTEGER_COLUMN_MAX, validate_form, form_field_names
from tests.conftest import InvoiceFactory, PropertyFactory


class TestFormCoercion:
    """Test raw value coercion."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_values(self, value):
        assert FormCoercion.is_blank(value)
        assert FormCoercion.to_text(value) is None
        assert FormCoercion.to_decimal(value) is None

    def test_to_text_strips(self):
        assert FormCoercion.to_text("  abc ") == "abc"
        assert FormCoercion.to_text(42) is None

    @pytest.mark.parametrize("value,expected", [
        ("12.5", Decimal("12.5")),
        (" 7 ", Decimal("7")),
        (3, Decimal("3")),
        (Decimal("0.01"), Decimal("0.01")),
    ])
    def test_to_decimal(self, value, expected):
        assert FormCoercion.to_decimal(value) == expected

    @pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", True, ["1"]])
    def test_to_decimal_rejects_non_numbers(self, value):
        assert FormCoercion.to_decimal(value) is None

    def test_to_int(self):
        assert FormCoercion.to_int("3") == 3
        assert FormCoercion.to_int("3.0") == 3
        assert FormCoercion.to_int("2.5") is None

    def test_to_int_maximum(self):
        assert FormCoercion.to_int("2147483647", maximum=INTEGER_COLUMN_MAX) == 2147483647
        assert FormCoercion.to_int("2147483648", maximum=INTEGER_COLUMN_MAX) is None
        assert FormCoercion.to_int("1e30", maximum=INTEGER_COLUMN_MAX) is None


class TestInvoiceForm:
    """Test invoice form validation."""

    def test_valid_form(self):
        result = validate_form(InvoiceForm, InvoiceFactory.form())

        assert result.success
        assert result.data.customer_id == "3958dc9e-712f-4377-85e9-fec4b6a6442a"
        assert result.data.amount == Decimal("125.50")
        assert result.data.status == InvoiceStatus.PENDING

    def test_form_field_names_use_aliases(self):
        assert form_field_names(InvoiceForm) == ["customerId", "amount", "status"]

    def test_amount_in_cents(self):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount="125.50"))
        assert result.data.amount_in_cents == 12550

    def test_amount_in_cents_rounds_half_up(self):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount="10.005"))
        assert result.data.amount_in_cents == 1001

    def test_numeric_amount_from_json(self):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount=19.99))
        assert result.data.amount_in_cents == 1999

    def test_empty_form_reports_every_field(self):
        result = validate_form(InvoiceForm, {})

        assert not result.success
        assert result.errors == {
            "customerId": ["Please select a customer."],
            "amount": ["Please enter an amount greater than $0."],
            "status": ["Please select an invoice status."],
        }

    @pytest.mark.parametrize("amount", ["0", "-5", "0.00"])
    def test_non_positive_amount(self, amount):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount=amount))

        assert not result.success
        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}

    @pytest.mark.parametrize("amount", ["0.001", "0.0049", "1e-30"])
    def test_amount_rounding_to_zero_cents(self, amount):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount=amount))
        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}

    def test_smallest_amount_rounds_up_to_one_cent(self):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount="0.005"))
        assert result.data.amount_in_cents == 1

    def test_largest_amount(self):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount="21474836.47"))
        assert result.data.amount_in_cents == INTEGER_COLUMN_MAX

    @pytest.mark.parametrize("amount", ["21474836.48", "21474836.475", "1e20", "1e30", 1e30])
    def test_amount_too_large_for_column(self, amount):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount=amount))
        assert result.errors == {"amount": ["Please enter a valid amount."]}

    def test_non_numeric_amount(self):
        result = validate_form(InvoiceForm, InvoiceFactory.form(amount="lots"))
        assert result.errors == {"amount": ["Please enter a valid amount."]}

    def test_unknown_status(self):
        result = validate_form(InvoiceForm, InvoiceFactory.form(status="overdue"))
        assert result.errors == {"status": ["Please select an invoice status."]}

    def test_extra_fields_ignored(self):
        form = {**InvoiceFactory.form(), "date": "1999-01-01", "id": "x"}
        result = validate_form(InvoiceForm, form)

        assert result.success
        assert "date" not in result.data.to_record()


class TestPropertyForm:
    """Test property form validation."""

    def test_valid_form(self):
        result = validate_form(PropertyForm, PropertyFactory.form())

        assert result.success
        record = result.data.to_record()
        assert record["monthly_rent"] == Decimal("1450.00")
        assert record["tenants"] == 2
        assert record["letting_status"] == LettingStatus.LET
        assert record["compliance_status"] == ComplianceStatus.PENDING

    def test_empty_form_reports_every_field(self):
        result = validate_form(PropertyForm, {})

        assert not result.success
        assert result.errors == {
            "title": ["Please enter a property title."],
            "address": ["Please enter a property address."],
            "imageUrl": ["Please provide a property image URL."],
            "monthlyRent": ["Please enter a valid monthly rent."],
            "tenants": ["Please enter a valid number of tenants."],
            "lettingStatus": ["Please select a letting status."],
            "complianceStatus": ["Please select a compliance status."],
        }

    @pytest.mark.parametrize("raw,expected", [
        ("let", LettingStatus.LET),
        ("not_let", LettingStatus.NOT_LET),
        ("true", LettingStatus.LET),
        ("false", LettingStatus.NOT_LET),
    ])
    def test_letting_status_accepts_two_states(self, raw, expected):
        result = validate_form(PropertyForm, PropertyFactory.form(letting_status=raw))
        assert result.data.letting_status == expected

    @pytest.mark.parametrize("raw", ["maybe", "", "LETTING"])
    def test_letting_status_rejects_other_values(self, raw):
        result = validate_form(PropertyForm, PropertyFactory.form(letting_status=raw))
        assert result.errors == {"lettingStatus": ["Please select a letting status."]}

    @pytest.mark.parametrize("tenants", ["-1", "1.5", "two", "2147483648", "1e30"])
    def test_invalid_tenants(self, tenants):
        result = validate_form(PropertyForm, PropertyFactory.form(tenants=tenants))
        assert result.errors == {"tenants": ["Please enter a valid number of tenants."]}

    def test_negative_rent(self):
        result = validate_form(PropertyForm, PropertyFactory.form(monthly_rent="-100"))
        assert result.errors == {"monthlyRent": ["Please enter a valid monthly rent."]}

    @pytest.mark.parametrize("rent", ["10000000000", "9999999999.995", "1e20", "1e30"])
    def test_rent_too_large_for_column(self, rent):
        result = validate_form(PropertyForm, PropertyFactory.form(monthly_rent=rent))
        assert result.errors == {"monthlyRent": ["Please enter a valid monthly rent."]}

    def test_rent_rounded_to_two_places(self):
        result = validate_form(PropertyForm, PropertyFactory.form(monthly_rent="1450.005"))
        assert result.data.monthly_rent == Decimal("1450.01")

    def test_largest_rent(self):
        result = validate_form(PropertyForm, PropertyFactory.form(monthly_rent="9999999999.99"))
        assert result.data.monthly_rent == MAX_MONTHLY_RENT

    def test_zero_rent_and_tenants_allowed(self):
        result = validate_form(PropertyForm, PropertyFactory.form(monthly_rent="0", tenants="0"))
        assert result.success
