"""Unit tests for the issue service (creation defaulting and updates)."""

import pytest

from issue_tracker.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from issue_tracker.schemas.issue import IssueCreate
from issue_tracker.services.issue_service import IssueService
from issue_tracker.services.project_service import ProjectService


@pytest.mark.asyncio
class TestCreateIssue:
    """Tests for IssueService.create_issue."""

    async def test_create_issue_defaults(self, issue_repo, project_repo):
        """Test that a new issue is OPEN, GENERAL and timestamped."""
        issue = await IssueService.create_issue(
            issue_repo, project_repo, {"title": "Crash", "description": "On start"}
        )

        assert issue.id == 1
        assert issue.status == "OPEN"
        assert issue.issue_type == "GENERAL"
        assert issue.assigned_to_user_id is None
        assert issue.created_at == issue.updated_at
        assert await issue_repo.count() == 1

    async def test_create_issue_accepts_schema_instance(self, issue_repo, project_repo):
        """Test that an already validated payload is accepted."""
        payload = IssueCreate(title="Crash", description="On start", issue_type="BUG")

        issue = await IssueService.create_issue(issue_repo, project_repo, payload)

        assert issue.issue_type == "BUG"

    async def test_default_project_is_smallest_id(self, issue_repo, project_repo):
        """Test that an issue without project joins the first project."""
        first = await ProjectService.create_project(project_repo, {"name": "Zeta"})
        await ProjectService.create_project(project_repo, {"name": "Alpha"})

        issue = await IssueService.create_issue(
            issue_repo, project_repo, {"title": "T", "description": "D"}
        )

        assert issue.project_id == first.id

    async def test_no_projects_means_no_project(self, issue_repo, project_repo):
        """Test that the issue has no project when none exist."""
        issue = await IssueService.create_issue(
            issue_repo, project_repo, {"title": "T", "description": "D"}
        )

        assert issue.project_id is None

    async def test_explicit_project(self, issue_repo, project_repo):
        """Test that an explicit project id is kept."""
        await ProjectService.create_project(project_repo, {"name": "First"})
        second = await ProjectService.create_project(project_repo, {"name": "Second"})

        issue = await IssueService.create_issue(
            issue_repo, project_repo, {"title": "T", "description": "D", "projectId": second.id}
        )

        assert issue.project_id == second.id

    async def test_unknown_project_rejected(self, issue_repo, project_repo):
        """Test that a dangling project id is rejected without writing."""
        with pytest.raises(InvalidReferenceError):
            await IssueService.create_issue(
                issue_repo, project_repo, {"title": "T", "description": "D", "projectId": 42}
            )

        assert await issue_repo.count() == 0

    async def test_validation_reports_every_field(self, issue_repo, project_repo):
        """Test that all invalid fields are reported together."""
        with pytest.raises(ValidationError) as exc_info:
            await IssueService.create_issue(
                issue_repo, project_repo, {"title": "", "description": "x" * 65537}
            )

        assert set(exc_info.value.fields) == {"title", "description"}
        assert await issue_repo.count() == 0

    async def test_title_length_boundaries(self, issue_repo, project_repo):
        """Test that 255 characters is accepted and 256 rejected."""
        issue = await IssueService.create_issue(
            issue_repo, project_repo, {"title": "t" * 255, "description": "D"}
        )
        assert len(issue.title) == 255

        with pytest.raises(ValidationError) as exc_info:
            await IssueService.create_issue(
                issue_repo, project_repo, {"title": "t" * 256, "description": "D"}
            )
        assert exc_info.value.fields == ["title"]

    async def test_invalid_issue_type_rejected(self, issue_repo, project_repo):
        """Test that an unknown issue type is rejected."""
        with pytest.raises(ValidationError):
            await IssueService.create_issue(
                issue_repo, project_repo, {"title": "T", "description": "D", "issueType": "EPIC"}
            )


@pytest.mark.asyncio
class TestUpdateIssue:
    """Tests for IssueService.update_issue and assign_issue."""

    async def test_partial_update(self, issue_repo, project_repo, make_issue):
        """Test that only supplied fields change."""
        issue = await make_issue(title="Old", description="Keep me")
        before = issue.updated_at

        updated = await IssueService.update_issue(
            issue_repo, project_repo, issue.id, {"title": "New", "status": "CLOSED"}
        )

        assert updated.title == "New"
        assert updated.status == "CLOSED"
        assert updated.description == "Keep me"
        assert updated.updated_at > before

    async def test_unassign(self, issue_repo, project_repo, make_issue):
        """Test that null assignee and project clear them."""
        project = await ProjectService.create_project(project_repo, {"name": "P"})
        issue = await make_issue(assigned_to_user_id="user-1", project_id=project.id)

        updated = await IssueService.update_issue(
            issue_repo, project_repo, issue.id, {"assignedToUserId": None, "projectId": None}
        )

        assert updated.assigned_to_user_id is None
        assert updated.project_id is None

    async def test_null_title_rejected(self, issue_repo, project_repo, make_issue):
        """Test that required fields cannot be nulled."""
        issue = await make_issue()

        with pytest.raises(ValidationError) as exc_info:
            await IssueService.update_issue(issue_repo, project_repo, issue.id, {"title": None})

        assert exc_info.value.fields == ["title"]

    async def test_update_missing_issue(self, issue_repo, project_repo):
        """Test updating an issue that does not exist."""
        with pytest.raises(NotFoundError):
            await IssueService.update_issue(issue_repo, project_repo, 99, {"title": "x"})

    async def test_update_unknown_project(self, issue_repo, project_repo, make_issue):
        """Test that moving to a missing project is rejected and nothing changes."""
        issue = await make_issue(title="Same")

        with pytest.raises(InvalidReferenceError):
            await IssueService.update_issue(
                issue_repo, project_repo, issue.id, {"title": "Changed", "projectId": 7}
            )

        assert issue_repo.rows[issue.id].title == "Same"

    async def test_assign_issue(self, issue_repo, make_issue):
        """Test assigning and unassigning through the assignee call."""
        issue = await make_issue()

        assigned = await IssueService.assign_issue(issue_repo, issue.id, {"assignedToUserId": "user-9"})
        assert assigned.assigned_to_user_id == "user-9"

        unassigned = await IssueService.assign_issue(issue_repo, issue.id, {"assignedToUserId": None})
        assert unassigned.assigned_to_user_id is None

    async def test_assign_requires_field(self, issue_repo, make_issue):
        """Test that the assignee field must be present."""
        issue = await make_issue()

        with pytest.raises(ValidationError):
            await IssueService.assign_issue(issue_repo, issue.id, {})

    async def test_get_missing_issue(self, issue_repo):
        """Test fetching an issue that does not exist."""
        with pytest.raises(NotFoundError) as exc_info:
            await IssueService.get_issue(issue_repo, 5)

        assert exc_info.value.detail == "Issue with ID 5 not found"


@pytest.mark.asyncio
class TestCreationProperties:
    """Default project and validation properties."""

    async def test_smallest_project_id_wins(self, issue_repo, project_repo):
        """Test that with projects 5 and 1 the issue joins project 1."""
        await project_repo.create({"id": 5, "name": "Five"})
        await project_repo.create({"id": 1, "name": "One"})

        issue = await IssueService.create_issue(
            issue_repo, project_repo, {"title": "T", "description": "D"}
        )

        assert issue.project_id == 1

    async def test_empty_title_update_rejected(self, issue_repo, project_repo, make_issue):
        """Test that an explicit empty title is rejected."""
        issue = await make_issue(title="Keep")

        with pytest.raises(ValidationError) as exc_info:
            await IssueService.update_issue(issue_repo, project_repo, issue.id, {"title": ""})

        assert "title" in exc_info.value.fields
        assert issue_repo.rows[issue.id].title == "Keep"

    @pytest.mark.parametrize("project_id", [0, 2**31, 10**20])
    async def test_project_id_outside_id_range_rejected(
        self, issue_repo, project_repo, project_id
    ):
        """Test that project ids no Integer column can hold fail validation."""
        with pytest.raises(ValidationError) as exc_info:
            await IssueService.create_issue(
                issue_repo, project_repo, {"title": "T", "description": "D", "projectId": project_id}
            )

        assert exc_info.value.fields == ["projectId"]
        assert await issue_repo.count() == 0

    async def test_update_project_id_outside_id_range_rejected(
        self, issue_repo, project_repo, make_issue
    ):
        """Test that moving an issue to an unstorable project id fails validation."""
        issue = await make_issue()

        with pytest.raises(ValidationError) as exc_info:
            await IssueService.update_issue(
                issue_repo, project_repo, issue.id, {"projectId": 2**31}
            )

        assert exc_info.value.fields == ["projectId"]
