"""FastAPI dependencies building repositories from the request session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db
from .repositories import IssueRepository, ProjectRepository, UserRepository


def get_issue_repository(db: AsyncSession = Depends(get_db)) -> IssueRepository:
    return IssueRepository(db)


def get_project_repository(db: AsyncSession = Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
