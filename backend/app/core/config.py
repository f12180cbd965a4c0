# app/core/config.py
"""
Application configuration using Pydantic Settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import json
from pydantic import field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """

    # Application
    APP_NAME: str = "Legal Clinic API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    # JWT Authentication
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480  # 8 hours

    # Login throttling / password recovery
    MAX_LOGIN_ATTEMPTS: int = 3
    LOCKOUT_MINUTES: int = 15
    PASSWORD_RESET_TOKEN_HOURS: int = 1
    MIN_PASSWORD_LENGTH: int = 6
    FRONTEND_URL: str = "http://localhost:5173"

    # CORS
    CORS_ORIGINS: str = '["http://localhost:5173", "http://localhost:5174", "http://localhost:3000"]'

    # Case updates
    STRICT_FIELD_ALLOW_LIST: bool = False

    # Error responses; falls back to DEBUG when unset
    EXPOSE_ERROR_DETAILS: Optional[bool] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("DATABASE_URL", "JWT_SECRET_KEY", mode="before")
    @classmethod
    def strip_value(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS JSON string to list"""
        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def expose_error_details(self) -> bool:
        if self.EXPOSE_ERROR_DETAILS is None:
            return self.DEBUG
        return self.EXPOSE_ERROR_DETAILS


settings = Settings()
