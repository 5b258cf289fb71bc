"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    environment: str = "production"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://catalog:catalog_dev_password@db:5432/product_catalog"
    db_retry_attempts: int = 3
    db_retry_max_delay: float = 5.0

    # CORS
    cors_origins: list[str] = ["http://localhost:4200"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_development(self) -> bool:
        """Whether the service runs in development mode."""
        return self.environment.lower() == "development"


settings = Settings()
