"""Configuration management using pydantic-settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database settings
    db_server: str = "localhost"
    db_name: str = "issuetracker"
    db_user: str = "issuetracker"
    db_password: str = ""
    db_port: int = 5432
    db_pool_size: int = 10
    db_max_overflow: int = 20
    sql_echo: bool = False
    # Full SQLAlchemy URL, takes precedence over the parts above
    # (e.g. "sqlite+aiosqlite:///./issues.db" for local development)
    db_url: Optional[str] = None

    # JWT settings (tokens are issued by the identity provider)
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 1440

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Issue list settings
    default_page_size: int = 10
    max_page_size: int = 100
    latest_issues_limit: int = 5

    # Email notification settings (Resend HTTP API)
    # Leave resend_api_key empty to disable outgoing email
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"
    email_from: str = "Issue Tracker <notifications@example.com>"
    email_timeout_seconds: float = 10.0
    app_base_url: str = "http://localhost:3000"

    @property
    def database_url(self) -> str:
        """Build PostgreSQL async connection string."""
        if self.db_url:
            return self.db_url
        from urllib.parse import quote_plus
        return (
            f"postgresql+asyncpg://{self.db_user}:{quote_plus(self.db_password)}"
            f"@{self.db_server}:{self.db_port}/{self.db_name}"
        )

    @property
    def sync_database_url(self) -> str:
        """Build sync connection string for Alembic."""
        if self.db_url:
            return self.db_url.replace("+asyncpg", "+psycopg2").replace("+aiosqlite", "")
        from urllib.parse import quote_plus
        return (
            f"postgresql+psycopg2://{self.db_user}:{quote_plus(self.db_password)}"
            f"@{self.db_server}:{self.db_port}/{self.db_name}"
        )

    @property
    def email_enabled(self) -> bool:
        """Whether outgoing email notifications are configured."""
        return bool(self.resend_api_key)


# Global settings instance
settings = Settings()
