"""Business logic services."""

from .auth_service import (
    CurrentUser,
    create_access_token,
    decode_access_token,
    get_current_user,
)
from .issue_query import (
    IssueQueryPlan,
    IssueQueryResult,
    issue_status_summary,
    latest_issues,
    normalize_issue_query,
    resolve_issues,
)
from .issue_service import IssueService
from .notification_service import (
    EmailMessage,
    IssueAssignment,
    NotificationService,
)
from .project_service import ProjectService

__all__ = [
    # Auth service
    "CurrentUser",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    # Issue query resolution
    "IssueQueryPlan",
    "IssueQueryResult",
    "issue_status_summary",
    "latest_issues",
    "normalize_issue_query",
    "resolve_issues",
    # Issue service
    "IssueService",
    # Notification service
    "EmailMessage",
    "IssueAssignment",
    "NotificationService",
    # Project service
    "ProjectService",
]
