"""Storage collaborators for the service layer."""

from .base import Filters, Repository, Sort, SQLAlchemyRepository
from .issue import IssueRepository
from .project import ProjectRepository
from .user import UserRepository

__all__ = [
    "Filters",
    "IssueRepository",
    "ProjectRepository",
    "Repository",
    "Sort",
    "SQLAlchemyRepository",
    "UserRepository",
]
