"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development.

    Environment Variables:
        UPLOAD_TEMPORARY_DIR: Directory receiving new uploads
        UPLOAD_PERMANENT_DIR: Default directory for promoted uploads
        UPLOAD_PATH_PREFIXES: Comma separated absolute prefixes stripped from
            display paths, first match wins (default: parent of both roots)
        UPLOAD_FILE_MODE: Permission bits for stored files, octal string (default 644)
        UPLOAD_TRANSPORT_DIR: Spool directory for incoming multipart bodies
            (default: system temp directory)
        MAX_UPLOAD_SIZE_BYTES: Maximum accepted upload size (default 100MB)
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
        ENVIRONMENT: development | production
        CORS_ORIGINS: Comma separated list of allowed origins
    """

    # Upload directories
    UPLOAD_TEMPORARY_DIR: str = "./data/uploads/tmp"
    UPLOAD_PERMANENT_DIR: str = "./data/uploads/files"
    UPLOAD_PATH_PREFIXES: str = ""
    UPLOAD_FILE_MODE: str = "644"
    UPLOAD_TRANSPORT_DIR: Optional[str] = None

    # Limits
    MAX_UPLOAD_SIZE_BYTES: int = 100 * 1024 * 1024  # 100 MB

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
