"""
Service layer for business logic implementation.
Contains the form actions, view invalidation, authentication and error handling.
"""

from .actions import FormActionService
from .auth import AuthService
from .error_handler import ErrorHandlerService
from .invoice import InvoiceService
from .property import PropertyService
from .revalidation import ViewInvalidator, ListingCache

__all__ = [
    "FormActionService",
    "AuthService",
    "ErrorHandlerService",
    "InvoiceService",
    "PropertyService",
    "ViewInvalidator",
    "ListingCache"
]
