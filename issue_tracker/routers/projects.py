"""Projects CRUD API endpoints.

Projects group issues. A project can only be deleted once no issue
references it. All endpoints require authentication.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_issue_repository, get_project_repository
from ..models.project import Project
from ..repositories import IssueRepository, ProjectRepository
from ..schemas.project import (
    ProjectCreate,
    ProjectDeleted,
    ProjectResponse,
    ProjectUpdate,
    ProjectWithIssues,
)
from ..services.auth_service import CurrentUser, get_current_user
from ..services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["Projects"])


def to_project_with_issues(project: Project, issues_count: int) -> ProjectWithIssues:
    return ProjectWithIssues(
        id=project.id,
        name=project.name,
        description=project.description,
        created_at=project.created_at,
        updated_at=project.updated_at,
        issues_count=issues_count,
    )


@router.get(
    "",
    response_model=List[ProjectWithIssues],
    summary="List all projects",
    description="Get all projects ordered by name, with their issue counts.",
)
async def list_projects(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    projects: ProjectRepository = Depends(get_project_repository),
    issues: IssueRepository = Depends(get_issue_repository),
) -> List[ProjectWithIssues]:
    return [
        to_project_with_issues(project, count)
        for project, count in await ProjectService.list_projects(projects, issues)
    ]


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new project",
    responses={
        201: {"description": "Project created successfully"},
        400: {"description": "Validation error or duplicate name"},
        401: {"description": "Not authenticated"},
    },
)
async def create_project(
    project_data: ProjectCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    projects: ProjectRepository = Depends(get_project_repository),
) -> Project:
    """
    Create a new project.

    - **name**: required, unique after trimming whitespace (case-sensitive)
    - **description**: optional
    """
    return await ProjectService.create_project(projects, project_data)


@router.get(
    "/{project_id}",
    response_model=ProjectWithIssues,
    summary="Get a project by ID",
    responses={
        200: {"description": "Project retrieved successfully"},
        401: {"description": "Not authenticated"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    projects: ProjectRepository = Depends(get_project_repository),
    issues: IssueRepository = Depends(get_issue_repository),
) -> ProjectWithIssues:
    project = await ProjectService.get_project(projects, project_id)
    issues_count = await ProjectService.count_issues(issues, project_id)
    return to_project_with_issues(project, issues_count)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update a project",
    responses={
        200: {"description": "Project updated successfully"},
        400: {"description": "Validation error or duplicate name"},
        401: {"description": "Not authenticated"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    projects: ProjectRepository = Depends(get_project_repository),
) -> Project:
    """
    Update a project's name and/or description.

    Omitted or blank values keep the current value.
    """
    return await ProjectService.update_project(projects, project_id, project_data)


@router.delete(
    "/{project_id}",
    response_model=ProjectDeleted,
    summary="Delete a project",
    responses={
        200: {"description": "Project deleted"},
        400: {"description": "Project still has issues"},
        401: {"description": "Not authenticated"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    projects: ProjectRepository = Depends(get_project_repository),
    issues: IssueRepository = Depends(get_issue_repository),
) -> ProjectDeleted:
    """
    Delete a project.

    Refused while any issue is assigned to the project; reassign those
    issues first.
    """
    deleted_id = await ProjectService.delete_project(projects, issues, project_id)
    return ProjectDeleted(id=deleted_id)
