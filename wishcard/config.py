"""Configuration settings for the Wishcard application."""

from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Database
    DATABASE_URL: str = "sqlite:///./wishcard.db"

    # Authentication
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12
    MIN_PASSWORD_LENGTH: int = 6

    # Admin
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASS: Optional[str] = None
    ADMIN_KEY: Optional[str] = None

    # Upload Configuration
    UPLOAD_DIR: str = "./uploads"
    MAX_FILE_SIZE: int = 2097152  # 2MB in bytes
    MAX_JSON_BODY_SIZE: int = 20480  # 20KB in bytes

    # Retention Configuration
    UPLOAD_TTL_DAYS: int = 7
    SWEEP_INTERVAL_HOURS: float = 6

    # Server Configuration
    ALLOWED_ORIGIN: Optional[str] = None
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    @property
    def upload_path(self) -> Path:
        """Get the absolute upload directory path."""
        return Path(self.UPLOAD_DIR).resolve()

    @property
    def upload_ttl_seconds(self) -> float:
        """Maximum age of an uploaded file before the sweeper removes it."""
        return self.UPLOAD_TTL_DAYS * 24 * 60 * 60

    @property
    def sweep_interval_seconds(self) -> float:
        return self.SWEEP_INTERVAL_HOURS * 60 * 60

    def share_link(self, wish_id: str) -> str:
        """Get the public viewing link for a wish."""
        return f"/view.html?id={wish_id}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
