import tempfile
from typing import List, Optional
from functools import lru_cache
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class FileSettings(BaseModel):
    """File upload related configuration"""
    max_file_size_mb: int = 100
    chunk_size: int = 1024 * 1024  # 1MB
    temp_dir: str = Field(default_factory=tempfile.gettempdir)

    @property
    def max_file_size(self) -> int:
        """Upload limit in bytes"""
        return self.max_file_size_mb * 1024 * 1024

class APISettings(BaseModel):
    """API related configuration"""
    title: str = "Parquet Viewer API"
    version: str = "1.0.0"
    description: str = "Decodes uploaded Parquet files into JSON rows and column metadata"
    cors_origins: List[str] = ["*"]

class ViewerSettings(BaseModel):
    """Viewer page configuration"""
    api_url: str = "http://localhost:8000"
    rows_per_page: int = 20
    max_page_buttons: int = 5
    request_timeout: int = 300  # seconds

class LoggingSettings(BaseModel):
    level: Optional[str] = None  # falls back to a per-environment default


class AppSettings(BaseSettings):
    """Main application settings"""
    # Environment
    environment: str = "development"

    # Nested configurations
    api: APISettings = Field(default_factory=APISettings)
    files: FileSettings = Field(default_factory=FileSettings)
    viewer: ViewerSettings = Field(default_factory=ViewerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Pydantic settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @property
    def log_level(self) -> str:
        """Explicit LOGGING__LEVEL wins, otherwise chatty in development and quiet under tests"""
        if self.logging.level:
            return self.logging.level.upper()
        if self.is_development:
            return "DEBUG"
        if self.is_testing:
            return "WARNING"
        return "INFO"

@lru_cache()
def get_settings() -> AppSettings:
    """
    Get cached settings instance.
    Using lru_cache ensures settings are loaded only once.
    """
    return AppSettings()

# Create a global settings instance
settings = get_settings()
