"""
Form validation utilities for the Rental Dashboard API.
Coerces raw form strings into typed values and flattens schema failures
into a field -> messages mapping.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError as PydanticValidationError
import logging

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)

# Key used for errors that are not attributable to a single field
FORM_ERROR_KEY = "form"

# Largest value a 32-bit INTEGER column holds
INTEGER_COLUMN_MAX = 2**31 - 1


class FormCoercion:
    """
    Coercion helpers used by form schema validators.
    Each returns None when the raw value cannot be coerced.
    """

    @staticmethod
    def is_blank(value: Any) -> bool:
        """Check whether a raw form value is missing or whitespace only."""
        return value is None or (isinstance(value, str) and not value.strip())

    @staticmethod
    def to_text(value: Any) -> Optional[str]:
        """Return stripped text, or None for missing/blank/non-string values."""
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @staticmethod
    def to_decimal(value: Any) -> Optional[Decimal]:
        """
        Coerce a raw value into a finite Decimal.

        Args:
            value: Raw form string or already-typed number

        Returns:
            Decimal value, or None if the value is blank or not a number
        """
        if isinstance(value, bool) or FormCoercion.is_blank(value):
            return None

        if isinstance(value, (int, float, Decimal)):
            raw = str(value)
        elif isinstance(value, str):
            raw = value.strip()
        else:
            return None

        try:
            number = Decimal(raw)
        except InvalidOperation:
            return None

        if not number.is_finite():
            return None
        return number

    @staticmethod
    def to_int(value: Any, maximum: Optional[int] = None) -> Optional[int]:
        """
        Coerce a raw value into an int; fractional numbers are rejected.

        Args:
            value: Raw form string or already-typed number
            maximum: Largest accepted value, checked before conversion

        Returns:
            int value, or None if the value is not a whole number or exceeds maximum
        """
        number = FormCoercion.to_decimal(value)
        if number is None or number != number.to_integral_value():
            return None
        if maximum is not None and number > maximum:
            return None
        return int(number)


class FormValidationResult(Generic[SchemaType]):
    """
    Outcome of validating one form submission.
    Holds either the typed record or the collected field errors, never both.
    """

    def __init__(
        self,
        data: Optional[SchemaType] = None,
        errors: Optional[Dict[str, List[str]]] = None
    ):
        self.data = data
        self.errors = errors or {}

    @property
    def success(self) -> bool:
        return self.data is not None and not self.errors

    def __repr__(self) -> str:
        if self.success:
            return f"<FormValidationResult(success=True, data={self.data!r})>"
        return f"<FormValidationResult(success=False, errors={self.errors!r})>"


def flatten_validation_errors(exception: PydanticValidationError) -> Dict[str, List[str]]:
    """
    Convert pydantic errors into a field -> messages mapping.

    Args:
        exception: Pydantic validation error

    Returns:
        Dictionary keyed by form field name, each holding every message for that field
    """
    field_errors: Dict[str, List[str]] = {}
    for error in exception.errors():
        field = str(error["loc"][0]) if error["loc"] else FORM_ERROR_KEY
        field_errors.setdefault(field, []).append(error["msg"])
    return field_errors


def form_field_names(schema: Type[BaseModel]) -> List[str]:
    """Return the raw form names a schema reads, honouring field aliases."""
    return [field.alias or name for name, field in schema.model_fields.items()]


def validate_form(schema: Type[SchemaType], raw: Mapping[str, Any]) -> FormValidationResult[SchemaType]:
    """
    Validate raw form values against a schema, collecting every field error.

    Only the fields the schema declares are read; absent fields are passed
    as None so that each one reports its own message. No I/O is performed.

    Args:
        schema: Pydantic form schema
        raw: Mapping of raw field name to raw value (form data or JSON body)

    Returns:
        FormValidationResult carrying the typed record or the field errors
    """
    payload = {name: raw.get(name) for name in form_field_names(schema)}

    try:
        data = schema.model_validate(payload)
    except PydanticValidationError as e:
        errors = flatten_validation_errors(e)
        logger.debug(f"{schema.__name__} validation failed for fields: {sorted(errors)}")
        return FormValidationResult(errors=errors)

    return FormValidationResult(data=data)
