"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict
from app.schemas.action import ActionState


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["amount"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Please enter an amount greater than $0."]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["amount_too_small"]
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["NOT_FOUND"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking")
    details: Optional[List[ErrorDetail]] = Field(None, description="Detailed error information")


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse


ERROR_DESCRIPTIONS = {
    401: "Unauthorized - Authentication required",
    403: "Forbidden - Inactive account",
    404: "Not Found - Resource does not exist",
    500: "Internal Server Error - Unexpected server error",
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response documentation for the given status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Mapping suitable for a route's `responses` argument
    """
    return {
        code: {"description": ERROR_DESCRIPTIONS[code], "model": APIErrorResponse}
        for code in status_codes
        if code in ERROR_DESCRIPTIONS
    }


def get_action_error_responses() -> Dict[int, Dict[str, Any]]:
    """Responses of a form action: field errors (422) or a database failure (500)."""
    responses = get_error_responses(401, 403)
    responses[422] = {
        "description": "Validation failed - field errors and summary message",
        "model": ActionState,
    }
    responses[500] = {
        "description": "Database error - summary message only",
        "model": ActionState,
    }
    return responses
