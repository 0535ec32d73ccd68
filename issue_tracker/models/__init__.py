"""SQLAlchemy ORM models package."""

from .issue import Issue
from .project import Project
from .user import User

__all__ = [
    "Issue",
    "Project",
    "User",
]
