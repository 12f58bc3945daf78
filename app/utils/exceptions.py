"""
Exceptions that leave the Rental Dashboard API as structured error responses.

Form actions report validation and database failures through ActionState
instead; only reads, authentication and malformed requests raise these.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class APIException(HTTPException):
    """HTTP exception carrying a machine-readable error code for the error envelope."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class BadRequestError(APIException):
    """Submission body that cannot be read as a form."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


# Authentication
class UnauthorizedError(APIException):
    """Missing or rejected credentials; the client should retry with a bearer token."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class InvalidCredentialsError(UnauthorizedError):
    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)


class TokenExpiredError(UnauthorizedError):
    def __init__(self, detail: str = "Token has expired"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)


class InactiveUserError(APIException):
    """The credentials are valid but the dashboard account is deactivated."""

    def __init__(self, detail: str = "User account is inactive"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


# Dashboard records
class RecordNotFoundError(APIException):
    """No dashboard record of the given kind has this id."""

    def __init__(self, entity: str, record_id: Optional[str] = None):
        detail = f"{entity} not found"
        if record_id:
            detail += f" with ID: {record_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )
        self.entity = entity
        self.record_id = record_id


class InvoiceNotFoundError(RecordNotFoundError):
    def __init__(self, invoice_id: str):
        super().__init__("Invoice", str(invoice_id))


class PropertyNotFoundError(RecordNotFoundError):
    def __init__(self, property_id: str):
        super().__init__("Property", str(property_id))
