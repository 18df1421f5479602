"""
User API schemas for request/response validation.

These schemas control what data is accepted and exposed via the API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, model_validator

from ..models.user import NAME_MAX_LENGTH


class UserCreate(BaseModel):
    """Schema for creating a new user (POST /users)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Display name",
        examples=["Ada Lovelace"]
    )
    email: EmailStr = Field(
        ...,
        description="Unique email address",
        examples=["ada@example.com"]
    )


class UserUpdate(BaseModel):
    """Schema for updating a user (PUT /users/{id}). Omitted fields are kept."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="New display name"
    )
    email: Optional[EmailStr] = Field(
        default=None,
        description="New email address"
    )

    @model_validator(mode='after')
    def require_one_field(self) -> "UserUpdate":
        """Reject empty updates."""
        if self.name is None and self.email is None:
            raise ValueError("At least one of 'name' or 'email' must be provided")
        return self


class UserResponse(BaseModel):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User id")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")


class UserListResponse(BaseModel):
    """Response for listing users."""

    users: list[UserResponse] = Field(..., description="List of users")
    total: int = Field(..., ge=0, description="Total matching users")
    skip: int = Field(..., ge=0, description="Users skipped")
    limit: int = Field(..., ge=1, description="Maximum users returned")

    @computed_field
    @property
    def has_more(self) -> bool:
        """Check if there are more users after this page."""
        return self.skip + len(self.users) < self.total
