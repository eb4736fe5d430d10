import os
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage backend: "memory" or "database"
    STORAGE_BACKEND: str = "memory"

    # Database settings (used when STORAGE_BACKEND=database)
    DATABASE_URL: Optional[str] = None
    DB_USER: str = "portal"
    DB_PASSWORD: str = "portal"
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"
    DB_NAME: str = "portal"
    DB_ECHO: bool = False

    # Session settings
    SESSION_SECRET: str = "dev-session-secret-change-me"
    SESSION_TTL_SECONDS: int = 86400
    SESSION_SLIDING: bool = True
    SESSION_COOKIE_NAME: str = "portal.sid"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_CHECK_PERIOD_SECONDS: int = 86400

    # Registration
    ALLOW_ADMIN_REGISTRATION: bool = False

    # File storage (MinIO, optional)
    STORAGE_ENDPOINT: Optional[str] = None
    STORAGE_ACCESS_KEY: Optional[str] = None
    STORAGE_SECRET_KEY: Optional[str] = None
    STORAGE_BUCKET: str = "portal-resources"
    STORAGE_SECURE: bool = False
    STORAGE_REGION: str = "us-east-1"

    # Optional development settings
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    SEED_DEMO_DATA: bool = False
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    class Config:
        # Look for env file in project root, even when running from subdirectories
        env_file = os.getenv("ENV_FILE") or str(Path(__file__).parent.parent.parent / "local.env")
        # Allow case-insensitive environment variable names
        case_sensitive = False


settings = Settings()
