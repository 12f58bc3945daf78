"""
Utility modules for the Rental Dashboard API.
"""

from .exceptions import (
    APIException,
    RecordNotFoundError,
    UnauthorizedError,
    BadRequestError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InactiveUserError,
    InvoiceNotFoundError,
    PropertyNotFoundError
)

from .validators import (
    FormCoercion,
    FormValidationResult,
    flatten_validation_errors,
    validate_form
)

__all__ = [
    # Exceptions
    "APIException",
    "RecordNotFoundError",
    "UnauthorizedError",
    "BadRequestError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InactiveUserError",
    "InvoiceNotFoundError",
    "PropertyNotFoundError",

    # Validators
    "FormCoercion",
    "FormValidationResult",
    "flatten_validation_errors",
    "validate_form"
]
