"""
Pydantic schemas for form validation and responses.
"""

# Action results
from .action import ActionState

# Authentication schemas
from .auth import (
    CurrentUserResponse,
    LoginResponse,
    LoginErrorResponse
)

# Invoice schemas
from .invoice import (
    InvoiceForm,
    InvoiceResponse,
    InvoiceListResponse
)

# Property schemas
from .property import (
    PropertyForm,
    PropertyResponse,
    PropertyListResponse
)

# Form descriptors
from .forms import (
    FormField,
    FormOption,
    FormDescriptor,
    INVOICE_FIELDS,
    PROPERTY_FIELDS,
    collect_form_values,
    invoice_form,
    property_form
)

# Error schemas
from .error import ErrorResponse, ErrorDetail

__all__ = [
    "ActionState",
    "CurrentUserResponse",
    "LoginResponse",
    "LoginErrorResponse",
    "InvoiceForm",
    "InvoiceResponse",
    "InvoiceListResponse",
    "PropertyForm",
    "PropertyResponse",
    "PropertyListResponse",
    "FormField",
    "FormOption",
    "FormDescriptor",
    "INVOICE_FIELDS",
    "PROPERTY_FIELDS",
    "collect_form_values",
    "invoice_form",
    "property_form",
    "ErrorResponse",
    "ErrorDetail",
]
