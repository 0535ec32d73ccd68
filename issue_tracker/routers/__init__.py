"""API routers package.

This package contains all FastAPI routers for the application.
Each router handles a specific domain of the API.
"""

from .issues import router as issues_router
from .projects import router as projects_router
from .users import router as users_router

__all__ = [
    "issues_router",
    "projects_router",
    "users_router",
]
