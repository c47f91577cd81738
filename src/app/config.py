"""Application configuration with structured settings groups."""
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict



# =============================================================================
# Nested Settings Models
# =============================================================================


class DatabaseOptions(BaseModel):
    """
    Database engine behaviour.

    echo: Log every SQL statement (noisy, for debugging only).
    create_schema: Create missing tables on application startup.
    """

    echo: bool = False
    create_schema: bool = True


class LoggingSettings(BaseModel):
    """Root logger configuration."""

    level: str = "INFO"
    format: str = "%(levelname)s - %(asctime)s - %(name)s - %(message)s"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Application settings with nested configuration groups.

    Environment variables use double underscore as delimiter for nested values.
    Example: DATABASE__ECHO=true, LOGGING__LEVEL=DEBUG
    """

    # Application metadata
    app_name: str = "Client Registry API"
    app_version: str = "1.0.0"

    # Database
    database_url: str = "postgresql+asyncpg://localhost/client_registry"

    # "sql" persists through SQLAlchemy, "memory" keeps clients in process
    store_backend: Literal["sql", "memory"] = "sql"

    # Nested settings groups
    database: DatabaseOptions = DatabaseOptions()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def uses_database(self) -> bool:
        return self.store_backend == "sql"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
