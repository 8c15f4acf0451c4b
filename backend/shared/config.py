"""
Centralized configuration for the Lectern backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., JWT_*, SUPABASE_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Lectern API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URL, used by run_migrations.py

    # Tokens
    jwt_signer_key: str = ""
    jwt_issuer: str = "localhost:8080"
    jwt_ttl_seconds: int = 3600

    # Passwords
    bcrypt_rounds: int = 10
    password_hash_timeout_seconds: float = 5.0
    password_reset_code_ttl_minutes: int = 15

    # Content storage
    course_image_dir: str = "uploads/images"
    lecture_pending_dir: str = "pending/video"
    lecture_public_dir: str = "uploads/video"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
