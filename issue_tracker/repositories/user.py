"""User repository (read side of the identity provider's users)."""

from ..models.user import User
from .base import SQLAlchemyRepository


class UserRepository(SQLAlchemyRepository[User]):
    """Storage access for the Users collection."""

    model = User
