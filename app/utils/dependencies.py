"""
FastAPI dependency injection utilities for services and authentication.
Provides reusable dependencies for route protection and service construction.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.models.user import User
from app.repositories.invoice import InvoiceRepository
from app.repositories.property import PropertyRepository
from app.services.auth import AuthService
from app.services.invoice import InvoiceService
from app.services.property import PropertyService
from app.services.revalidation import ViewInvalidator, get_view_invalidator
from app.utils.exceptions import UnauthorizedError, InactiveUserError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Database session

    Returns:
        AuthService instance
    """
    return AuthService(db)


async def get_invoice_service(
    db: AsyncSession = Depends(get_db),
    invalidator: ViewInvalidator = Depends(get_view_invalidator)
) -> InvoiceService:
    """
    Get invoice service instance backed by the SQLAlchemy repository.

    Args:
        db: Database session
        invalidator: Process-wide view invalidator

    Returns:
        InvoiceService instance
    """
    return InvoiceService(InvoiceRepository(db), invalidator)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    invalidator: ViewInvalidator = Depends(get_view_invalidator)
) -> PropertyService:
    """
    Get property service instance backed by the SQLAlchemy repository.

    Args:
        db: Database session
        invalidator: Process-wide view invalidator

    Returns:
        PropertyService instance
    """
    return PropertyService(PropertyRepository(db), invalidator)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer credentials
        auth_service: Authentication service

    Returns:
        Current User object

    Raises:
        UnauthorizedError: If no token provided or token is invalid
        TokenExpiredError: If token is expired
        InactiveUserError: If user account is inactive
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get current active user (additional check for user status).

    Args:
        current_user: Current user from token

    Returns:
        Active User object

    Raises:
        InactiveUserError: If user account is inactive
    """
    if not current_user.is_active:
        raise InactiveUserError()

    return current_user
