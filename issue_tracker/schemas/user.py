"""Pydantic schemas for User responses."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Schema for user response (public data only)."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(
        ...,
        description="User identifier issued by the identity provider",
    )
    name: Optional[str] = Field(
        None,
        description="User's display name",
        examples=["Jane Doe"],
    )
    email: Optional[str] = Field(
        None,
        description="User's email address",
        examples=["jane@example.com"],
    )
    image: Optional[str] = Field(
        None,
        description="URL to user's avatar image",
    )
