"""Pydantic schemas package for request/response validation."""

from .issue import (
    IssueAssigneeUpdate,
    IssueCreate,
    IssuePage,
    IssueResponse,
    IssueStatus,
    IssueStatusCount,
    IssueType,
    IssueUpdate,
    PageLinks,
)
from .project import (
    ProjectCreate,
    ProjectDeleted,
    ProjectResponse,
    ProjectUpdate,
    ProjectWithIssues,
)
from .user import UserResponse

__all__ = [
    # Issue schemas
    "IssueAssigneeUpdate",
    "IssueCreate",
    "IssuePage",
    "IssueResponse",
    "IssueStatus",
    "IssueStatusCount",
    "IssueType",
    "IssueUpdate",
    "PageLinks",
    # Project schemas
    "ProjectCreate",
    "ProjectDeleted",
    "ProjectResponse",
    "ProjectUpdate",
    "ProjectWithIssues",
    # User schemas
    "UserResponse",
]
