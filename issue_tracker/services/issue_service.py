"""Issue service: validation and defaulting for issue writes.

Every write is a single repository call after all checks pass, so a rejected
request never leaves a partial write behind.
"""

import logging
from typing import Any, Mapping, Union

from ..exceptions import InvalidReferenceError, NotFoundError
from ..models.issue import Issue, utcnow
from ..models.project import Project
from ..repositories.base import Repository
from ..schemas.issue import IssueAssigneeUpdate, IssueCreate, IssueStatus, IssueUpdate
from .payload import parse_payload

logger = logging.getLogger(__name__)


class IssueService:
    """
    Service for creating and updating issues.

    Repositories are passed in explicitly by the caller (the HTTP layer builds
    them from the request-scoped session).
    """

    @staticmethod
    async def get_issue(issues: Repository[Issue], issue_id: int) -> Issue:
        """
        Fetch an issue by id.

        Raises:
            NotFoundError: If the issue does not exist
        """
        issue = await issues.find_by_id(issue_id)
        if issue is None:
            raise NotFoundError(f"Issue with ID {issue_id} not found")
        return issue

    @staticmethod
    async def _ensure_project_exists(projects: Repository[Project], project_id: int) -> None:
        if await projects.find_by_id(project_id) is None:
            logger.warning(f"Rejected issue write: project {project_id} does not exist")
            raise InvalidReferenceError(f"Invalid projectId: project {project_id} does not exist")

    @staticmethod
    async def create_issue(
        issues: Repository[Issue],
        projects: Repository[Project],
        payload: Union[IssueCreate, Mapping[str, Any]],
    ) -> Issue:
        """
        Create a new issue.

        Default project assignment: when no project is given the issue joins
        the project with the smallest id. With no projects at all the issue
        is created without one.

        Args:
            issues: Issue repository
            projects: Project repository
            payload: Title, description and optional issue type / project id

        Returns:
            Issue: The created issue, status OPEN

        Raises:
            ValidationError: Listing every invalid field
            InvalidReferenceError: If the given project does not exist
        """
        data = parse_payload(IssueCreate, payload)

        project_id = data.project_id
        if project_id is not None:
            await IssueService._ensure_project_exists(projects, project_id)
        else:
            default_project = await projects.find_first(sort=[("id", "asc")])
            if default_project is not None:
                project_id = default_project.id

        now = utcnow()
        issue = await issues.create(
            {
                "title": data.title,
                "description": data.description,
                "issue_type": data.issue_type.value,
                "status": IssueStatus.OPEN.value,
                "project_id": project_id,
                "created_at": now,
                "updated_at": now,
            }
        )

        logger.info(f"Issue created: id={issue.id}, project={issue.project_id}")
        return issue

    @staticmethod
    async def update_issue(
        issues: Repository[Issue],
        projects: Repository[Project],
        issue_id: int,
        payload: Union[IssueUpdate, Mapping[str, Any]],
    ) -> Issue:
        """
        Apply a partial update to an issue.

        Only fields present in the payload change. ``assigned_to_user_id``
        and ``project_id`` accept None to unassign. ``updated_at`` is
        refreshed on every successful update.

        Raises:
            ValidationError: Listing every invalid field
            NotFoundError: If the issue does not exist
            InvalidReferenceError: If a non-null project id does not exist
        """
        data = parse_payload(IssueUpdate, payload)
        changes = data.model_dump(exclude_unset=True, mode="json")

        await IssueService.get_issue(issues, issue_id)

        if changes.get("project_id") is not None:
            await IssueService._ensure_project_exists(projects, changes["project_id"])

        changes["updated_at"] = utcnow()
        issue = await issues.update(issue_id, changes)

        logger.info(f"Issue updated: id={issue_id}, fields={sorted(changes)}")
        return issue

    @staticmethod
    async def assign_issue(
        issues: Repository[Issue],
        issue_id: int,
        payload: Union[IssueAssigneeUpdate, Mapping[str, Any]],
    ) -> Issue:
        """
        Change only the assignee of an issue (None unassigns).

        Raises:
            ValidationError: If the assignee id is malformed
            NotFoundError: If the issue does not exist
        """
        data = parse_payload(IssueAssigneeUpdate, payload)

        await IssueService.get_issue(issues, issue_id)
        issue = await issues.update(
            issue_id,
            {"assigned_to_user_id": data.assigned_to_user_id, "updated_at": utcnow()},
        )

        logger.info(f"Issue assigned: id={issue_id}, assignee={data.assigned_to_user_id}")
        return issue
