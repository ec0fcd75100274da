from pydantic import BaseModel, Field

from schemas.posts import (
    DEFAULT_BODY_MAX,
    DEFAULT_SUMMARY_LENGTH,
    DEFAULT_TITLE_MAX,
    PostLimits,
)


class DatabaseConfig(BaseModel):
    """Database connection and engine configuration."""

    url: str = Field(..., description="Database connection URL")
    echo: bool = Field(default=False, description="Enable SQL query logging")
    pool_size: int = Field(default=10, ge=1, le=100)
    max_overflow: int = Field(default=20, ge=0, le=100)
    pool_timeout: int = Field(default=30, ge=1, le=300)
    pool_pre_ping: bool = Field(default=True)


class ServerConfig(BaseModel):
    """Server runtime configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    reload: bool = Field(default=False, description="Enable auto-reload in development")
    check_db_on_start: bool = Field(
        default=True, description="Run DB connection check on startup"
    )
    create_schema_on_start: bool = Field(
        default=True, description="Create missing tables on startup"
    )


class LoggingConfig(BaseModel):
    """Application logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


class PostConfig(BaseModel):
    """Limits applied to submitted posts and to derived summaries."""

    title_max: int = Field(default=DEFAULT_TITLE_MAX, ge=1)
    body_max: int = Field(default=DEFAULT_BODY_MAX, ge=1)
    summary_length: int = Field(default=DEFAULT_SUMMARY_LENGTH, ge=1)

    @property
    def limits(self) -> PostLimits:
        return PostLimits(title_max=self.title_max, body_max=self.body_max)
