"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Resume Builder API"
    VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Database
    # DATABASE_URL wins over the individual PostgreSQL fields when set.
    DATABASE_URL: Optional[str] = None
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "resume_builder"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60
    VERIFICATION_TOKEN_EXPIRE_HOURS: int = 24
    PASSWORD_RESET_TOKEN_EXPIRE_HOURS: int = 1

    # Outbound mail (LogTransport is used when MAIL_SERVER is empty)
    MAIL_SERVER: str = ""
    MAIL_PORT: int = 587
    MAIL_USERNAME: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_FROM: str = "no-reply@resume-builder.local"
    MAIL_FROM_NAME: str = "Resume Builder"
    MAIL_USE_TLS: bool = True
    MAIL_USE_SSL: bool = False
    MAIL_TIMEOUT_SECONDS: int = 10
    MAIL_MAX_WORKERS: int = 2

    # Frontend base URL used for links embedded in emails
    FRONTEND_URL: str = "http://localhost:5173"

    # CORS (comma separated lists, "*" allows everything)
    CORS_ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:5174"
    CORS_ALLOWED_METHODS: str = "*"
    CORS_ALLOWED_HEADERS: str = "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}"
                f"/{self.DATABASE_DBNAME}")

    @property
    def cors_origins(self) -> List[str]:
        return _split_csv(self.CORS_ALLOWED_ORIGINS)

    @property
    def cors_methods(self) -> List[str]:
        return _split_csv(self.CORS_ALLOWED_METHODS)

    @property
    def cors_headers(self) -> List[str]:
        return _split_csv(self.CORS_ALLOWED_HEADERS)

    @property
    def smtp_enabled(self) -> bool:
        return bool(self.MAIL_SERVER)


# Global settings instance
settings = Settings()
