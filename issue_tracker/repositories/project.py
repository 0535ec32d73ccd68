"""Project repository."""

from ..models.project import Project
from .base import SQLAlchemyRepository


class ProjectRepository(SQLAlchemyRepository[Project]):
    """Storage access for the Projects collection."""

    model = Project
