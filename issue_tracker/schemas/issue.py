"""Pydantic schemas for Issue model validation."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class IssueStatus(str, Enum):
    """Issue status enumeration."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    CLOSED = "CLOSED"


class IssueType(str, Enum):
    """Issue type enumeration."""

    GENERAL = "GENERAL"
    BUG = "BUG"
    SPIKE = "SPIKE"
    TASK = "TASK"
    SUBTASK = "SUBTASK"


# Human readable labels, in display order
STATUS_LABELS = {
    IssueStatus.OPEN: "Open",
    IssueStatus.IN_PROGRESS: "In Progress",
    IssueStatus.CLOSED: "Closed",
}

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 65536

# Range of the Integer primary keys (issue and project ids)
ID_MAX = 2**31 - 1


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class IssueCreate(CamelModel):
    """Schema for creating a new issue."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Issue title/summary",
        examples=["Login button does nothing on Safari"],
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Issue description (markdown)",
        examples=["Steps to reproduce:\n\n1. Open the login page"],
    )
    issue_type: IssueType = Field(
        IssueType.GENERAL,
        description="Type of issue",
        examples=["BUG"],
    )
    project_id: Optional[int] = Field(
        None,
        ge=1,
        le=ID_MAX,
        description="ID of the owning project. Defaults to the first project when omitted.",
    )


class IssueUpdate(CamelModel):
    """
    Schema for a partial issue update.

    Only fields present in the payload are applied. ``assignedToUserId`` and
    ``projectId`` may be sent as null to unassign; the other fields may not.
    """

    title: Optional[str] = Field(
        None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Issue title/summary",
    )
    description: Optional[str] = Field(
        None,
        min_length=1,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Issue description (markdown)",
    )
    status: Optional[IssueStatus] = Field(
        None,
        description="Issue status",
    )
    issue_type: Optional[IssueType] = Field(
        None,
        description="Type of issue",
    )
    assigned_to_user_id: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="ID of the assigned user, null to unassign",
    )
    project_id: Optional[int] = Field(
        None,
        ge=1,
        le=ID_MAX,
        description="ID of the owning project, null to remove from its project",
    )

    @field_validator("title", "description", "status", "issue_type")
    @classmethod
    def reject_null(cls, value):
        # Validators only run for supplied values, so None here is an explicit null
        if value is None:
            raise ValueError("Field may not be null")
        return value


class IssueAssigneeUpdate(CamelModel):
    """Schema for changing only the assignee of an issue."""

    assigned_to_user_id: Optional[str] = Field(
        ...,
        min_length=1,
        max_length=255,
        description="ID of the assigned user, null to unassign",
    )


class IssueResponse(CamelModel):
    """Schema for issue response."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int = Field(..., description="Unique issue identifier")
    title: str = Field(..., description="Issue title/summary")
    description: str = Field(..., description="Issue description (markdown)")
    status: IssueStatus = Field(..., description="Issue status")
    issue_type: IssueType = Field(..., description="Type of issue")
    assigned_to_user_id: Optional[str] = Field(
        None,
        description="ID of the assigned user",
    )
    project_id: Optional[int] = Field(
        None,
        description="ID of the owning project",
    )
    created_at: datetime = Field(..., description="When the issue was created")
    updated_at: datetime = Field(..., description="When the issue was last updated")


class PageLinks(CamelModel):
    """Query strings for navigating an issue list, null when not applicable."""

    first: str
    previous: Optional[str] = None
    next: Optional[str] = None
    last: str


class IssuePage(CamelModel):
    """One page of a filtered, sorted issue list."""

    items: List[IssueResponse] = Field(
        default_factory=list,
        description="Issues in this page",
    )
    total_count: int = Field(
        0,
        description="Number of issues matching the filters, before pagination",
    )
    page: int = Field(1, description="Current page (1-based)")
    page_size: int = Field(10, description="Page size actually applied")
    page_count: int = Field(0, description="Number of pages for total_count")
    links: Optional[PageLinks] = None


class IssueStatusCount(CamelModel):
    """Issue count for one status (or for all issues)."""

    label: str = Field(..., examples=["Open"])
    status: str = Field(..., examples=["OPEN", "ALL"])
    count: int = Field(0)
