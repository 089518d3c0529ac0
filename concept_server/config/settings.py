# settings.py
# Version: 1.0
# Purpose: Core settings module for application configuration management using Pydantic

# External imports
from pydantic import SecretStr, field_validator, model_validator  # pydantic v2
from pydantic_settings import BaseSettings, SettingsConfigDict  # pydantic-settings v2
from typing import Any, Dict
from functools import lru_cache
import logging

# Configure logger
logger = logging.getLogger(__name__)

# Global constants
TEST_DB_NAME = "test-db"
ALLOWED_ENVIRONMENTS = ["development", "test", "staging", "production"]


class Settings(BaseSettings):
    """
    Settings management using pydantic-settings.
    Values come from the environment first, then from a local .env file.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    # Core Application Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    TEST: bool = False
    PROJECT_NAME: str = "Concept Server"
    API_PREFIX: str = "/api"

    # Session Settings
    SECRET_KEY: SecretStr = SecretStr("development-only-secret-key-change-me")
    SESSION_COOKIE: str = "session"

    # MongoDB Configuration
    MONGODB_URL: SecretStr = SecretStr("mongodb://localhost:27017")
    MONGODB_DB_NAME: str = "concept-server"
    MONGODB_MAX_POOL_SIZE: int = 10
    MONGODB_MIN_POOL_SIZE: int = 1
    MONGODB_TIMEOUT_MS: int = 5000

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment setting."""
        if v not in ALLOWED_ENVIRONMENTS:
            raise ValueError(f"Environment must be one of {ALLOWED_ENVIRONMENTS}")
        return v

    @field_validator("MONGODB_URL")
    @classmethod
    def validate_mongodb_url(cls, v: SecretStr) -> SecretStr:
        """Validate MongoDB URL format."""
        url = v.get_secret_value()
        if not url.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("Invalid MongoDB URL format")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Session secret must be strong outside of local development and tests."""
        if self.ENVIRONMENT in ("staging", "production"):
            if len(self.SECRET_KEY.get_secret_value()) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters long")
        return self

    @property
    def database_name(self) -> str:
        """Test mode always talks to the dedicated test database."""
        if self.TEST or self.ENVIRONMENT == "test":
            return TEST_DB_NAME
        return self.MONGODB_DB_NAME

    def get_mongodb_settings(self) -> Dict[str, Any]:
        """
        Returns MongoDB connection settings.
        """
        return {
            "host": self.MONGODB_URL.get_secret_value(),
            "db": self.database_name,
            "maxPoolSize": self.MONGODB_MAX_POOL_SIZE,
            "minPoolSize": self.MONGODB_MIN_POOL_SIZE,
            "connectTimeoutMS": self.MONGODB_TIMEOUT_MS,
            "serverSelectionTimeoutMS": self.MONGODB_TIMEOUT_MS,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached settings instance.
    Uses lru_cache to prevent multiple environment variable reads.
    """
    return Settings()


__all__ = [
    'Settings', 'get_settings', 'TEST_DB_NAME', 'ALLOWED_ENVIRONMENTS'
]
