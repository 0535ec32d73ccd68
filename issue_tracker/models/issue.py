"""Issue SQLAlchemy model for issue tracking."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from ..database import Base


def utcnow() -> datetime:
    """Timezone-aware current time used for all timestamps."""
    return datetime.now(timezone.utc)


class Issue(Base):
    """
    Issue model representing a trackable unit of work.

    Attributes:
        id: Unique identifier (autoincrement integer)
        title: Issue title/summary
        description: Markdown description
        status: OPEN, IN_PROGRESS or CLOSED
        issue_type: GENERAL, BUG, SPIKE, TASK or SUBTASK
        assigned_to_user_id: Opaque id of the assigned user (identity provider)
        project_id: FK to the owning project, if any
        created_at: Timestamp when issue was created
        updated_at: Timestamp when issue was last updated
    """

    __tablename__ = "Issues"

    # Primary key
    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Issue details
    title = Column(
        String(255),
        nullable=False,
    )
    description = Column(
        Text,
        nullable=False,
    )
    status = Column(
        String(20),
        nullable=False,
        default="OPEN",
        index=True,
    )
    issue_type = Column(
        String(20),
        nullable=False,
        default="GENERAL",
        index=True,
    )

    # References
    assigned_to_user_id = Column(
        String(255),
        nullable=True,
        index=True,
    )
    project_id = Column(
        Integer,
        ForeignKey("Projects.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Issue."""
        return f"<Issue(id={self.id}, status={self.status}, title={self.title[:30]})>"
