"""
Pydantic schemas for authentication responses.
Login credentials arrive as a form and go through the authenticate action unvalidated.
"""

from pydantic import BaseModel, Field


class CurrentUserResponse(BaseModel):
    """Signed-in user information."""

    id: str = Field(..., description="User unique identifier")
    email: str = Field(..., description="User's email address")
    full_name: str = Field(..., description="User's full name")
    is_active: bool = Field(..., description="Whether the account is active")


class LoginResponse(BaseModel):
    """Login response with access token."""

    user: CurrentUserResponse
    access_token: str = Field(
        ...,
        description="JWT access token",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."]
    )
    token_type: str = Field(
        default="bearer",
        description="Token type",
        examples=["bearer"]
    )
    expires_in: int = Field(
        ...,
        description="Access token expiration time in seconds",
        examples=[1800]
    )


class LoginErrorResponse(BaseModel):
    """Fixed user-facing message for a failed sign-in."""

    message: str = Field(..., examples=["Invalid credentials."])
