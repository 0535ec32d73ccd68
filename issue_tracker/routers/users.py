"""Users API endpoints.

Users come from the identity provider; this router only lists them
(assignee pickers and the user filter).
"""

from typing import List

from fastapi import APIRouter, Depends

from ..dependencies import get_user_repository
from ..models.user import User
from ..repositories import UserRepository
from ..schemas.user import UserResponse
from ..services.auth_service import CurrentUser, get_current_user

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List users",
    description="All known users ordered by name.",
)
async def list_users(
    current_user: CurrentUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> List[User]:
    return await users.find_many(sort=[("name", "asc"), ("id", "asc")])
