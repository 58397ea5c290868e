"""Application settings and configuration management."""

from pathlib import Path
from typing import Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    # Application
    app_name: str = Field(default="Flange Dashboard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    environment: str = Field(default="production", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # API
    flange_log_path: str = Field(default="/api/flange-log", alias="FLANGE_LOG_PATH")
    flange_log_limit: int = Field(default=100, alias="FLANGE_LOG_LIMIT")
    simulated_query_delay_seconds: float = Field(
        default=0.3, alias="SIMULATED_QUERY_DELAY_SECONDS"
    )
    backend_cors_origins: list[str] = Field(
        default=["http://localhost:8501"], alias="BACKEND_CORS_ORIGINS"
    )

    # Data loading
    flange_api_url: str = Field(default="", alias="FLANGE_API_URL")
    dashboard_fetch_limit: int = Field(default=500, alias="DASHBOARD_FETCH_LIMIT")
    api_timeout_seconds: float = Field(default=10.0, alias="API_TIMEOUT_SECONDS")
    mock_loader_delay_seconds: float = Field(default=1.0, alias="MOCK_LOADER_DELAY_SECONDS")

    # Storage
    storage_dir: Path = Field(default=Path("./dashboard_data"), alias="STORAGE_DIR")

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, list[str]]) -> Union[list[str], str]:
        """Parse CORS origins from environment variable."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("flange_log_limit", "dashboard_fetch_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        """Record limits must be positive."""
        if v <= 0:
            raise ValueError("Record limit must be positive")
        return v


# Global settings instance
settings = Settings()
