"""
API request and response models.

Pydantic models for form parsing and JSON responses.
"""

from pydantic import BaseModel, Field


class SignupFormData(BaseModel):
    """Fields posted by the signup form."""

    email: str = Field("", description="Email address to register")
    password: str = Field("", description="Password (minimum 8 characters)")
    password_confirmation: str | None = Field(
        None, description="Repeated password; checked against password when present"
    )


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
