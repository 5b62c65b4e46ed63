"""
HornetHive Configuration Module
Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "HornetHive"
    debug: bool = False

    # Database
    database_url: str = Field(..., alias="DATABASE_URL")
    database_pool_size: int = 20
    database_max_overflow: int = 40

    # Credentials
    bcrypt_rounds: int = 12
    password_max_age_months: int = 3

    # Links embedded in notification emails
    public_base_url: str = "http://localhost:8000"
    login_url: str = "http://127.0.0.1:5500/HornetHiveLogin.html"

    # Mail
    admin_email: str = ""
    mail_from: str = ""
    smtp_host: str = ""  # Empty means log messages instead of sending them
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True

    # Logging
    log_dir: str = "/var/log/hornethive"
    log_level: str = "INFO"

    # API Settings
    api_prefix: str = "/api"

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        """bcrypt only accepts work factors between 4 and 31."""
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("password_max_age_months")
    @classmethod
    def validate_password_max_age(cls, v: int) -> int:
        if v < 1:
            raise ValueError("PASSWORD_MAX_AGE_MONTHS must be at least 1")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience alias
settings = get_settings()
