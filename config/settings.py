"""Application settings and configuration management using Pydantic Settings"""

import logging
from typing import Any, List, Optional
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

INSECURE_DEFAULT_JWT_SECRET = "your-secret-key"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    # Authentication
    JWT_SECRET: str = INSECURE_DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 7
    BCRYPT_ROUNDS: int = 10

    # MongoDB Configuration (unset = in-memory storage)
    MONGODB_URI: Optional[str] = None
    MONGODB_DB_NAME: str = "smartfit"
    MONGODB_TIMEOUT_MS: int = 5000

    # Security Settings
    ALLOWED_ORIGINS: str = "http://localhost:5000"  # Comma-separated list
    MAX_REQUEST_SIZE: int = 1024 * 1024  # 1MB, JSON payloads only

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "20/minute"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def use_mongodb(self) -> bool:
        return bool(self.MONGODB_URI)

    @property
    def jwt_secret_is_default(self) -> bool:
        return self.JWT_SECRET == INSECURE_DEFAULT_JWT_SECRET

    # Logging Configuration
    LOG_LEVEL: str = "INFO"

    # Environment Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Application Info
    APP_TITLE: str = "SmartFit API"
    APP_DESCRIPTION: str = "Virtual fitting room backend: measurements, fit prediction, favorites and recommendations"
    APP_VERSION: str = "1.2.0"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize settings and validate the JWT signing key

        The default signing key is a well-known constant. It is tolerated
        outside production with a warning and rejected in production.
        """
        super().__init__(**kwargs)

        if self.jwt_secret_is_default:
            if self.ENVIRONMENT == "production":
                raise ValueError(
                    "JWT_SECRET must be set in production (the default signing key is public)"
                )
            logger.warning("⚠️ JWT_SECRET not set - using the insecure default signing key")


# Singleton instance
settings = Settings()
