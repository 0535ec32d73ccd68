"""User SQLAlchemy model.

Users are created by the external identity provider; this service only reads
them (assignee lists, notification recipients).
"""

from sqlalchemy import Column, String

from ..database import Base


class User(Base):
    """
    User model mirrored from the identity provider.

    Attributes:
        id: Opaque identifier issued by the identity provider
        name: Display name
        email: Email address used for notifications
        image: Avatar URL
    """

    __tablename__ = "Users"

    id = Column(
        String(255),
        primary_key=True,
    )
    name = Column(
        String(255),
        nullable=True,
    )
    email = Column(
        String(255),
        unique=True,
        nullable=True,
        index=True,
    )
    image = Column(
        String(500),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
