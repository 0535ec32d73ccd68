"""FastAPI application entry point."""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import TimeoutError as SQLAlchemyTimeoutError

from .config import settings
from .database import Database
from .exceptions import IssueTrackerError, ValidationError
from .routers import issues_router, projects_router, users_router

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown tasks."""
    # Startup
    if getattr(app.state, "database", None) is None:
        logger.info("Connecting to database...")
        app.state.database = Database(settings)
    database: Database = app.state.database

    if await database.ping():
        logger.info("Database connection ready")
    else:
        logger.warning("Database not reachable at startup; requests will retry")

    if not settings.email_enabled:
        logger.info("RESEND_API_KEY not set, assignment emails are disabled")

    yield

    # Shutdown
    logger.info("Disposing database engine...")
    await database.dispose()
    logger.info("Database engine disposed")


async def issue_tracker_error_handler(request: Request, exc: IssueTrackerError):
    """Map domain errors to their HTTP status."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with every failing field."""
    error = ValidationError.from_pydantic(exc)
    logger.info(f"Invalid request on {request.method} {request.url.path}: {error.fields}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Database pool exhaustion handler - return 503 so clients can retry
async def db_pool_exhausted_handler(request: Request, exc: SQLAlchemyTimeoutError):
    """Handle database connection pool exhaustion with 503 Service Unavailable."""
    logger.warning(
        f"Database pool exhausted on {request.method} {request.url}: {exc}"
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "Service temporarily unavailable. Please retry.",
            "retry_after": 5,
        },
        headers={"Retry-After": "5"},
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Log all unhandled exceptions with full traceback."""
    logger.error(f"Unhandled exception on {request.method} {request.url}:")
    logger.error(f"Exception type: {type(exc).__name__}")
    logger.error(f"Exception message: {str(exc)}")
    logger.error(f"Traceback:\n{traceback.format_exc()}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: Optional pre-built database (tests pass one bound to
            their own engine); otherwise one is created at startup

    Returns:
        FastAPI: The configured application
    """
    app = FastAPI(
        title="Issue Tracker API",
        description="Issue tracking with projects, filtering and assignment emails",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(IssueTrackerError, issue_tracker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyTimeoutError, db_pool_exhausted_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # Include API routers
    app.include_router(issues_router)
    app.include_router(projects_router)
    app.include_router(users_router)

    @app.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "status": "healthy",
            "service": "Issue Tracker API",
            "version": "1.0.0",
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint for monitoring."""
        database: Optional[Database] = request.app.state.database
        database_ok = database is not None and await database.ping()
        return {
            "status": "healthy" if database_ok else "degraded",
            "database": "ok" if database_ok else "unavailable",
            "email": "enabled" if settings.email_enabled else "disabled",
        }

    return app


app = create_app()


def run() -> None:
    """Run the server (entry point for CLI)."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
