"""Project service: uniqueness and referential checks for project writes.

Name uniqueness is checked here before writing and also enforced by the
unique constraint on ``Projects.name``; the check-then-write sequence itself
is not atomic.
"""

import logging
from typing import Any, List, Mapping, Tuple, Union

from ..exceptions import ConflictError, NotFoundError
from ..models.issue import Issue, utcnow
from ..models.project import Project
from ..repositories.base import Repository
from ..schemas.project import ProjectCreate, ProjectUpdate
from .payload import parse_payload

logger = logging.getLogger(__name__)


def _duplicate_name_error(name: str) -> ConflictError:
    return ConflictError(f'A project with the name "{name}" already exists')


class ProjectService:
    """Service for creating, updating and deleting projects."""

    @staticmethod
    async def get_project(projects: Repository[Project], project_id: int) -> Project:
        """
        Fetch a project by id.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = await projects.find_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project with ID {project_id} not found")
        return project

    @staticmethod
    async def list_projects(
        projects: Repository[Project],
        issues: Repository[Issue],
    ) -> List[Tuple[Project, int]]:
        """All projects ordered by name, each paired with its issue count."""
        counts = await issues.count_by("project_id")
        return [
            (project, counts.get(project.id, 0))
            for project in await projects.find_many(sort=[("name", "asc"), ("id", "asc")])
        ]

    @staticmethod
    async def count_issues(issues: Repository[Issue], project_id: int) -> int:
        return await issues.count({"project_id": project_id})

    @staticmethod
    async def create_project(
        projects: Repository[Project],
        payload: Union[ProjectCreate, Mapping[str, Any]],
    ) -> Project:
        """
        Create a new project.

        The name is stored trimmed and must be unique (case-sensitive) after
        trimming. A blank description is stored as None.

        Raises:
            ValidationError: If the name is missing/blank or too long
            ConflictError: If another project already has this name
        """
        data = parse_payload(ProjectCreate, payload)
        name = data.name.strip()

        if await projects.find_first({"name": name}) is not None:
            logger.warning(f"Rejected project create: duplicate name {name!r}")
            raise _duplicate_name_error(name)

        now = utcnow()
        project = await projects.create(
            {
                "name": name,
                "description": (data.description or "").strip() or None,
                "created_at": now,
                "updated_at": now,
            }
        )

        logger.info(f"Project created: id={project.id}, name={project.name!r}")
        return project

    @staticmethod
    async def update_project(
        projects: Repository[Project],
        project_id: int,
        payload: Union[ProjectUpdate, Mapping[str, Any]],
    ) -> Project:
        """
        Update a project's name and/or description.

        Omitted, empty and whitespace-only values keep the stored value; a
        field cannot be blanked out through this call. A new name is checked
        for uniqueness against every other project.

        Raises:
            ValidationError: If a value is too long
            NotFoundError: If the project does not exist
            ConflictError: If another project already has the new name
        """
        data = parse_payload(ProjectUpdate, payload)
        await ProjectService.get_project(projects, project_id)

        name = (data.name or "").strip()
        description = (data.description or "").strip()

        changes = {}
        if name:
            duplicate = await projects.find_first({"name": name}, exclude={"id": project_id})
            if duplicate is not None:
                logger.warning(f"Rejected project rename of {project_id}: duplicate name {name!r}")
                raise _duplicate_name_error(name)
            changes["name"] = name
        if description:
            changes["description"] = description
        changes["updated_at"] = utcnow()

        project = await projects.update(project_id, changes)

        logger.info(f"Project updated: id={project_id}, fields={sorted(changes)}")
        return project

    @staticmethod
    async def delete_project(
        projects: Repository[Project],
        issues: Repository[Issue],
        project_id: int,
    ) -> int:
        """
        Delete a project that has no issues.

        Returns:
            int: The deleted project's id

        Raises:
            NotFoundError: If the project does not exist
            ConflictError: If any issue still references the project; the
                message names the project and the exact issue count
        """
        project = await ProjectService.get_project(projects, project_id)

        issues_count = await ProjectService.count_issues(issues, project_id)
        if issues_count > 0:
            logger.warning(
                f"Rejected project delete: id={project_id} has {issues_count} issue(s)"
            )
            raise ConflictError(
                f'Cannot delete project "{project.name}". It has {issues_count} '
                f"assigned issue(s). Please reassign all issues to another project "
                f"before deleting this project."
            )

        await projects.delete(project_id)

        logger.info(f"Project deleted: id={project_id}, name={project.name!r}")
        return project_id
