"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "skillsync_user"
    postgres_password: str = "password"
    postgres_db: str = "skillsync_db"

    # Full SQLAlchemy URL, overrides the postgres_* parts when set
    database_url: str = ""

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "skillsync_docs"

    # DeepSeek AI (OpenAI-compatible)
    deepseek_api_key: str = ""
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    deepseek_model: str = "deepseek-chat"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # OTP sign-in (mail goes out through Resend)
    otp_expire_minutes: int = 5
    resend_api_key: str = ""
    mail_from: str = "SkillSync <noreply@skillsync.app>"

    # Uploaded document storage
    storage_dir: str = "storage"
    public_base_url: str = "http://localhost:8000"
    max_upload_mb: int = 5

    # AI input limits
    max_document_chars: int = 15000
    max_job_description_chars: int = 4000
    min_job_description_chars: int = 20

    # App
    auto_analyze_uploads: bool = True
    cors_origins: str = "*"
    log_level: str = "INFO"
    debug: bool = False

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or self.postgres_url

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
