"""
API route handlers for the Rental Dashboard API.
Provides organized routing for authentication, invoices and properties.
"""

from .auth import router as auth_router
from .invoices import router as invoices_router
from .properties import router as properties_router

__all__ = ["auth_router", "invoices_router", "properties_router"]
