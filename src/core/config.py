from functools import lru_cache
import os

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config_models import DatabaseConfig, LoggingConfig, PostConfig, ServerConfig


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if not isinstance(value, str):
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseSettings):
    """Application settings assembled from environment variables and defaults."""

    # Environment
    environment: str = Field(default="development", pattern="^(development|staging|production)$")
    debug: bool = Field(default=False)

    # App
    app_title: str = Field(default="Postboard")
    app_version: str = Field(default="1.0.0")
    app_description: str = Field(default="A small server-rendered blog")

    # Server
    server: ServerConfig = ServerConfig()

    # Logging
    logging: LoggingConfig = LoggingConfig()

    # Posts
    posts: PostConfig = PostConfig()

    # Database (populated in validator)
    database: DatabaseConfig | None = None

    # Pydantic v2 settings config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **values):
        # Ensure plain ValueError is raised (not Pydantic ValidationError)
        if not os.getenv("DATABASE_URL"):
            raise ValueError("DATABASE_URL environment variable is required")
        super().__init__(**values)

    @model_validator(mode="after")
    def _assemble_subconfigs(self):
        """Assemble nested configurations from environment variables."""
        database_url = os.getenv("DATABASE_URL")

        pool_size = int(os.getenv("DB_POOL_SIZE", "10"))
        max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "20"))
        pool_timeout = int(os.getenv("DB_POOL_TIMEOUT", "30"))
        echo = self.environment == "development" and self.debug

        self.database = DatabaseConfig(
            url=database_url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
        )

        self.posts = PostConfig(
            title_max=int(os.getenv("POST_TITLE_MAX", str(self.posts.title_max))),
            body_max=int(os.getenv("POST_BODY_MAX", str(self.posts.body_max))),
            summary_length=int(os.getenv("POST_SUMMARY_LENGTH", str(self.posts.summary_length))),
        )

        # Adjust logging for environment
        if self.environment == "production":
            self.logging.level = "WARNING"
        elif self.environment == "development":
            self.logging.level = "DEBUG"

        # Server env overrides
        check_flag = _env_flag("DB_CHECK_ON_START")
        if check_flag is not None:
            self.server.check_db_on_start = check_flag
        schema_flag = _env_flag("DB_CREATE_SCHEMA")
        if schema_flag is not None:
            self.server.create_schema_on_start = schema_flag

        return self


@lru_cache
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
