"""Pydantic models for API requests and responses.

Response field names follow the wire format the demo documents, which is why
a few fields (requestId, simulateError) are camelCase aliases.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# User Models
# =============================================================================


class UserSchema(BaseModel):
    """A stored user."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique user identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")


class UserCreate(BaseModel):
    """
    Request model for creating a user.

    Both fields are optional at the schema level so that a missing field is
    reported with the API's own 400 message rather than a schema error.
    """

    name: Optional[str] = Field(None, json_schema_extra={"example": "Carol"})
    email: Optional[str] = Field(None, json_schema_extra={"example": "carol@example.com"})


class UserUpdate(BaseModel):
    """Request model for updating a user. Empty values leave fields unchanged."""

    name: Optional[str] = Field(None, description="New display name")
    email: Optional[str] = Field(None, description="New email address")


class UserResponse(BaseModel):
    """Response wrapping a single user."""

    user: UserSchema


class UserListResponse(BaseModel):
    """Response model for listing users."""

    users: list[UserSchema] = Field(..., description="All stored users")


class UserDeletedResponse(BaseModel):
    """Response returned after a delete."""

    message: str = Field(default="User deleted")
    user: UserSchema


# =============================================================================
# Health Check Models
# =============================================================================


class HealthCheckResponse(BaseModel):
    """Response model for the application health endpoint."""

    status: Literal["healthy", "unhealthy"] = Field(..., description="Overall status")
    timestamp: datetime = Field(..., description="Check timestamp")
    uptime: float = Field(..., description="Server uptime in seconds")


class ProbeResponse(BaseModel):
    """Response model for liveness and readiness probes."""

    status: str = Field(..., description="Probe status")
    timestamp: datetime = Field(..., description="Probe timestamp")


# =============================================================================
# Error Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response model."""

    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(..., description="Human-readable error message")
    request_id: Optional[str] = Field(
        None,
        alias="requestId",
        description="Correlation id of the failed request (5xx only)",
    )


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Optional[Any] = Field(None, description="Invalid value provided")


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: str = Field(default="Invalid request body", description="Error message")
    details: list[ValidationErrorDetail] = Field(..., description="List of validation errors")
