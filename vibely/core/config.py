"""
Application Configuration for Vibely Backend
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Get the project root directory (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./vibely.db"
    DATABASE_ECHO: bool = False

    # Session Configuration
    JWT_SECRET_KEY: str = "dev-secret-key-change-in-production"  # Default for development
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7
    SESSION_COOKIE_NAME: str = "jwt"

    # Chat provider (Stream)
    STREAM_API_KEY: str = ""
    STREAM_API_SECRET: str = ""
    STREAM_TIMEOUT_SECONDS: float = 5.0

    # Profile defaults
    DEFAULT_AVATAR_URL: str = "https://api.dicebear.com/9.x/adventurer/svg?seed=Eden"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 5001
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Vibely API"
    DEBUG: bool = False

    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:5173"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from string"""
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "10/minute"

    # Environment
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def session_max_age_seconds(self) -> int:
        return self.JWT_EXPIRE_DAYS * 24 * 60 * 60

    @property
    def chat_configured(self) -> bool:
        return bool(self.STREAM_API_KEY and self.STREAM_API_SECRET)
