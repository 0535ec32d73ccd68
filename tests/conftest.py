"""Shared pytest fixtures for backend tests."""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator, Dict, List, Mapping, Optional

# Settings are read at import time, configure them before importing the app
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RESEND_API_KEY"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from issue_tracker.config import settings
from issue_tracker.database import Base, Database, get_db
from issue_tracker.main import create_app
from issue_tracker.models import Issue, Project, User
from issue_tracker.services.auth_service import create_access_token

# Use in-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryRepository:
    """
    Dict-backed implementation of the repository protocol.

    Lets the services and the query resolver be tested without a database.
    """

    def __init__(self, model):
        self.model = model
        self.rows: Dict[Any, Any] = {}
        self._next_id = 1

    def _check(self, name: str) -> None:
        if name not in self.model.__table__.columns:
            raise ValueError(f"{self.model.__name__} has no attribute '{name}'")

    def _matches(self, row, filters: Optional[Mapping], exclude: Optional[Mapping]) -> bool:
        for name, value in (filters or {}).items():
            self._check(name)
            if getattr(row, name) != value:
                return False
        for name, value in (exclude or {}).items():
            self._check(name)
            if getattr(row, name) == value:
                return False
        return True

    async def find_by_id(self, id):
        return self.rows.get(id)

    async def find_many(self, filters=None, sort=None, offset=0, limit=None, exclude=None) -> List:
        rows = [row for row in self.rows.values() if self._matches(row, filters, exclude)]
        # Stable sorts applied from the last key to the first
        for name, direction in reversed(list(sort or ())):
            self._check(name)
            rows.sort(key=lambda row: getattr(row, name), reverse=direction == "desc")
        rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def count(self, filters=None, exclude=None) -> int:
        return len([row for row in self.rows.values() if self._matches(row, filters, exclude)])

    async def count_by(self, field: str, filters=None) -> Dict[Any, int]:
        self._check(field)
        counts: Dict[Any, int] = {}
        for row in self.rows.values():
            if self._matches(row, filters, None):
                value = getattr(row, field)
                counts[value] = counts.get(value, 0) + 1
        return counts

    async def find_first(self, filters=None, sort=None, exclude=None):
        rows = await self.find_many(filters, sort, limit=1, exclude=exclude)
        return rows[0] if rows else None

    async def create(self, data: Mapping[str, Any]):
        for name in data:
            self._check(name)
        values = dict(data)
        if "id" not in values and self.model.__table__.columns["id"].autoincrement is True:
            values["id"] = self._next_id
            self._next_id += 1
        row = self.model(**values)
        self.rows[row.id] = row
        return row

    async def update(self, id, data: Mapping[str, Any]):
        row = self.rows.get(id)
        if row is None:
            return None
        for name, value in data.items():
            self._check(name)
            setattr(row, name, value)
        return row

    async def delete(self, id) -> bool:
        return self.rows.pop(id, None) is not None


@pytest.fixture
def issue_repo() -> InMemoryRepository:
    """In-memory issue repository."""
    return InMemoryRepository(Issue)


@pytest.fixture
def project_repo() -> InMemoryRepository:
    """In-memory project repository."""
    return InMemoryRepository(Project)


@pytest.fixture
def make_issue(issue_repo: InMemoryRepository):
    """Factory seeding issues into the in-memory repository."""
    counter = {"n": 0}

    async def _make_issue(**overrides) -> Issue:
        counter["n"] += 1
        data = {
            "title": f"Issue {counter['n']}",
            "description": "Something to do",
            "status": "OPEN",
            "issue_type": "GENERAL",
            "assigned_to_user_id": None,
            "project_id": None,
            "created_at": BASE_TIME + timedelta(minutes=counter["n"]),
            "updated_at": BASE_TIME + timedelta(minutes=counter["n"]),
        }
        data.update(overrides)
        return await issue_repo.create(data)

    return _make_issue


@pytest_asyncio.fixture
async def engine():
    """Create a test database engine with SQLite."""
    engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign key support for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Clean up
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database dependency override."""
    app = create_app(database=Database(settings, engine=engine))

    async def override_get_db():
        yield db_session
        await db_session.commit()

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    user = User(
        id="user-1",
        name="Test User",
        email="test@example.com",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def test_user_2(db_session: AsyncSession) -> User:
    """Create a second test user."""
    user = User(
        id="user-2",
        name="Another User",
        email="another@example.com",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def auth_token(test_user: User) -> str:
    """Create an authentication token for the test user."""
    return create_access_token(data={"sub": test_user.id, "email": test_user.email})


@pytest.fixture
def auth_headers(auth_token: str) -> dict:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest_asyncio.fixture
async def test_project(db_session: AsyncSession) -> Project:
    """Create a test project."""
    project = Project(
        name="Test Project",
        description="A test project",
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
    )
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


@pytest_asyncio.fixture
async def test_issue(db_session: AsyncSession, test_project: Project) -> Issue:
    """Create a test issue in the test project."""
    issue = Issue(
        title="Test Issue",
        description="A test issue description",
        status="OPEN",
        issue_type="BUG",
        project_id=test_project.id,
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
    )
    db_session.add(issue)
    await db_session.commit()
    await db_session.refresh(issue)
    return issue
