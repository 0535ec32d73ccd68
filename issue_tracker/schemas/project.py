"""Pydantic schemas for Project model validation."""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .issue import DESCRIPTION_MAX_LENGTH, CamelModel


class ProjectCreate(CamelModel):
    """Schema for creating a new project."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Project name, unique after trimming whitespace",
        examples=["Website Redesign"],
    )
    description: Optional[str] = Field(
        None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Project description",
        examples=["Complete website redesign with new branding"],
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        """Trim the name before the length checks."""
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("Project name is required")
        return value


class ProjectUpdate(CamelModel):
    """
    Schema for updating a project.

    Blank values are accepted and leave the stored value unchanged.
    """

    name: Optional[str] = Field(
        None,
        max_length=255,
        description="Project name",
    )
    description: Optional[str] = Field(
        None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Project description",
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class ProjectResponse(CamelModel):
    """Schema for project response."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int = Field(..., description="Unique project identifier")
    name: str = Field(..., description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    created_at: datetime = Field(..., description="When the project was created")
    updated_at: datetime = Field(..., description="When the project was last updated")


class ProjectWithIssues(ProjectResponse):
    """Schema for project response with issues count."""

    issues_count: int = Field(
        0,
        description="Number of issues in this project",
    )


class ProjectDeleted(CamelModel):
    """Response for a successful project delete."""

    id: int
