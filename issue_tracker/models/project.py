"""Project SQLAlchemy model."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from ..database import Base
from .issue import utcnow


class Project(Base):
    """
    Project model, a named grouping of issues.

    Issues reference projects through ``Issues.project_id``; the foreign key
    is RESTRICT so a project with issues cannot be removed at the storage
    level either.

    Attributes:
        id: Unique identifier (autoincrement integer)
        name: Project name, trimmed and unique
        description: Optional project description
        created_at: Timestamp when project was created
        updated_at: Timestamp when project was last updated
    """

    __tablename__ = "Projects"

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name = Column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )
    description = Column(
        Text,
        nullable=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"
