"""Configuration settings for SweetHome API."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8787"))

    # Storage
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "json")  # json, sql
    DB_PATH: str = os.getenv("DB_PATH", "db.json")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./sweet_home.db")

    # Upload
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    UPLOAD_RATE_LIMIT: str = os.getenv("UPLOAD_RATE_LIMIT", "30/minute")

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if self.STORE_BACKEND not in ("json", "sql"):
            errors.append(f"Unknown STORE_BACKEND '{self.STORE_BACKEND}' - falling back to json")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
