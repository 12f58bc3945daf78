"""
Database models for the Rental Dashboard API.
Includes Invoice, Property and User models.
"""

from app.models.invoice import Invoice, InvoiceStatus
from app.models.property import Property, LettingStatus, ComplianceStatus
from app.models.user import User

# Export all models for easy importing
__all__ = [
    "Invoice",
    "InvoiceStatus",
    "Property",
    "LettingStatus",
    "ComplianceStatus",
    "User",
]
