"""Issues API endpoints.

Provides the filtered/sorted/paginated issue list, dashboard reads (status
summary, latest issues) and issue create/update. Issues cannot be deleted.
All endpoints require authentication.
"""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, status

from ..config import settings
from ..dependencies import (
    get_issue_repository,
    get_project_repository,
    get_user_repository,
)
from ..models.issue import Issue
from ..repositories import IssueRepository, ProjectRepository, UserRepository
from ..schemas.issue import (
    IssueAssigneeUpdate,
    IssueCreate,
    IssuePage,
    IssueResponse,
    IssueStatusCount,
    IssueUpdate,
    PageLinks,
)
from ..services.auth_service import CurrentUser, get_current_user
from ..services.issue_query import (
    issue_status_summary,
    latest_issues,
    normalize_issue_query,
    resolve_issues,
)
from ..services.issue_service import IssueService
from ..services.notification_service import IssueAssignment, NotificationService
from ..utils.query_string import build_page_links

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/issues", tags=["Issues"])


async def schedule_assignment_email(
    background_tasks: BackgroundTasks,
    users: UserRepository,
    issue: Issue,
    previous_assignee_id: Optional[str],
    current_user: CurrentUser,
) -> bool:
    """
    Queue an email to the new assignee when the assignee changed.

    Nothing is sent for unassignment, unchanged assignee, self-assignment,
    or an assignee without a known email address.

    Returns:
        bool: True if an email was queued
    """
    assignee_id = issue.assigned_to_user_id
    if not assignee_id or assignee_id == previous_assignee_id:
        return False

    # Don't notify if user assigns to themselves
    if assignee_id == current_user.id:
        return False

    assignee = await users.find_by_id(assignee_id)
    if assignee is None or not assignee.email:
        logger.info(f"No email address for assignee {assignee_id}, skipping notification")
        return False

    background_tasks.add_task(
        NotificationService.notify_issue_assigned,
        IssueAssignment(
            issue_id=issue.id,
            issue_title=issue.title,
            issue_type=issue.issue_type,
            created_at=issue.created_at,
            assignee_email=assignee.email,
            assignee_name=assignee.name,
        ),
    )
    return True


@router.get(
    "",
    response_model=IssuePage,
    summary="List issues",
    description="Filtered, sorted and paginated issue list.",
    responses={
        200: {"description": "Page of issues retrieved successfully"},
        401: {"description": "Not authenticated"},
    },
)
async def list_issues(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    issues: IssueRepository = Depends(get_issue_repository),
    issue_status: Optional[str] = Query(None, alias="status", description="OPEN, IN_PROGRESS or CLOSED"),
    issue_type: Optional[str] = Query(None, alias="issueType", description="GENERAL, BUG, SPIKE, TASK or SUBTASK"),
    user_id: Optional[str] = Query(None, alias="userId", description="Assignee id, -1 for all users"),
    project_id: Optional[str] = Query(None, alias="projectId", description="Project id"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="title, status, issueType or createdAt"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    page: Optional[str] = Query(None, description="1-based page index"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Issues per page"),
) -> IssuePage:
    """
    List issues matching the given filters.

    - **status**, **issueType**, **userId**, **projectId**: filters, combined with AND
    - **sortBy** / **sortOrder**: sort key and direction (default createdAt desc)
    - **page** / **pageSize**: pagination (default page 1, 10 per page, at most 100)

    Unknown or malformed values never fail the request; they fall back to
    "no filter" or to the defaults. The response includes the total count
    before pagination and query strings for page navigation.
    """
    plan = normalize_issue_query(
        status=issue_status,
        issue_type=issue_type,
        user_id=user_id,
        project_id=project_id,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    result = await resolve_issues(issues, plan)

    links = build_page_links(dict(request.query_params), plan.page, result.page_count)

    return IssuePage(
        items=[IssueResponse.model_validate(issue) for issue in result.items],
        total_count=result.total_count,
        page=plan.page,
        page_size=plan.page_size,
        page_count=result.page_count,
        links=PageLinks(**links),
    )


@router.get(
    "/summary",
    response_model=List[IssueStatusCount],
    summary="Issue counts per status",
)
async def get_issue_status_summary(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    issues: IssueRepository = Depends(get_issue_repository),
    include_all: bool = Query(False, alias="includeAll", description="Prepend the total count"),
    project_id: Optional[str] = Query(None, alias="projectId", description="Restrict to one project"),
) -> List[IssueStatusCount]:
    """Count issues per status (Open, In Progress, Closed), optionally per project."""
    plan = normalize_issue_query(project_id=project_id)
    summary = await issue_status_summary(issues, project_id=plan.project_id, include_all=include_all)
    return [IssueStatusCount(**entry) for entry in summary]


@router.get(
    "/latest",
    response_model=List[IssueResponse],
    summary="Most recently created issues",
)
async def get_latest_issues(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    issues: IssueRepository = Depends(get_issue_repository),
    project_id: Optional[str] = Query(None, alias="projectId", description="Restrict to one project"),
) -> List[Issue]:
    """Return the latest issues, newest first."""
    plan = normalize_issue_query(project_id=project_id)
    return await latest_issues(issues, project_id=plan.project_id, limit=settings.latest_issues_limit)


@router.get(
    "/{issue_id}",
    response_model=IssueResponse,
    summary="Get an issue by ID",
    responses={
        200: {"description": "Issue retrieved successfully"},
        401: {"description": "Not authenticated"},
        404: {"description": "Issue not found"},
    },
)
async def get_issue(
    issue_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    issues: IssueRepository = Depends(get_issue_repository),
) -> Issue:
    return await IssueService.get_issue(issues, issue_id)


@router.post(
    "",
    response_model=IssueResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new issue",
    responses={
        201: {"description": "Issue created successfully"},
        400: {"description": "Validation error or invalid projectId"},
        401: {"description": "Not authenticated"},
    },
)
async def create_issue(
    issue_data: IssueCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    issues: IssueRepository = Depends(get_issue_repository),
    projects: ProjectRepository = Depends(get_project_repository),
) -> Issue:
    """
    Create a new issue.

    - **title**: required, 1-255 characters
    - **description**: required, 1-65536 characters
    - **issueType**: optional, defaults to GENERAL
    - **projectId**: optional; when omitted the issue joins the first project
      (smallest id), or no project if none exist
    """
    return await IssueService.create_issue(issues, projects, issue_data)


@router.patch(
    "/{issue_id}",
    response_model=IssueResponse,
    summary="Update an issue",
    responses={
        200: {"description": "Issue updated successfully"},
        400: {"description": "Validation error or invalid projectId"},
        401: {"description": "Not authenticated"},
        404: {"description": "Issue not found"},
    },
)
async def update_issue(
    issue_id: int,
    issue_data: IssueUpdate,
    background_tasks: BackgroundTasks,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    issues: IssueRepository = Depends(get_issue_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    users: UserRepository = Depends(get_user_repository),
) -> Issue:
    """
    Partially update an issue.

    Only the fields present in the body are changed. Assigning the issue to
    another user emails that user.
    """
    existing = await IssueService.get_issue(issues, issue_id)
    previous_assignee_id = existing.assigned_to_user_id

    issue = await IssueService.update_issue(issues, projects, issue_id, issue_data)

    await schedule_assignment_email(
        background_tasks, users, issue, previous_assignee_id, current_user
    )
    return issue


@router.patch(
    "/{issue_id}/assignee",
    response_model=IssueResponse,
    summary="Assign or unassign an issue",
    responses={
        200: {"description": "Assignee updated successfully"},
        400: {"description": "Validation error"},
        401: {"description": "Not authenticated"},
        404: {"description": "Issue not found"},
    },
)
async def update_issue_assignee(
    issue_id: int,
    assignee_data: IssueAssigneeUpdate,
    background_tasks: BackgroundTasks,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    issues: IssueRepository = Depends(get_issue_repository),
    users: UserRepository = Depends(get_user_repository),
) -> Issue:
    """Set **assignedToUserId** (null unassigns) and email the new assignee."""
    existing = await IssueService.get_issue(issues, issue_id)
    previous_assignee_id = existing.assigned_to_user_id

    issue = await IssueService.assign_issue(issues, issue_id, assignee_data)

    await schedule_assignment_email(
        background_tasks, users, issue, previous_assignee_id, current_user
    )
    return issue
