"""Issue repository."""

from ..models.issue import Issue
from .base import SQLAlchemyRepository


class IssueRepository(SQLAlchemyRepository[Issue]):
    """Storage access for the Issues collection."""

    model = Issue
