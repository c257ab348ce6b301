"""
Configuration Management

Centralized configuration management using Pydantic Settings for type safety
and environment variable integration.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load environment variables from .env file if it exists
load_dotenv(dotenv_path=Path(".") / ".env")


class DatabaseSettings(BaseSettings):
    """Database configuration settings"""

    DATABASE_URL: str = Field(default="sqlite:///./hotel_engine.db")

    # Connection pool settings
    DB_POOL_SIZE: int = Field(default=20)
    DB_MAX_OVERFLOW: int = Field(default=10)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=3600)

    # Statement timeout applied by the store (milliseconds, PostgreSQL only)
    DB_STATEMENT_TIMEOUT_MS: int = Field(default=5000)

    DB_ECHO: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")  # json or text
    LOG_FILE: str = Field(default="")

    # Structured logging
    ENABLE_STRUCTURED_LOGGING: bool = Field(default=True)
    LOG_SQL_QUERIES: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of {valid_levels}')
        return v.upper()

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v):
        if v.lower() not in ('json', 'text'):
            raise ValueError('Log format must be "json" or "text"')
        return v.lower()


class PricingSettings(BaseSettings):
    """Defaults used when a hotel does not configure its own pricing rules"""

    CURRENCY: str = Field(default="INR")
    DEFAULT_BASE_OCCUPANCY: int = Field(default=2, ge=1)
    DEFAULT_GST_RATE: Decimal = Field(default=Decimal("12.00"), ge=0)
    DEFAULT_SERVICE_TAX_RATE: Decimal = Field(default=Decimal("0.00"), ge=0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }


class Settings(BaseSettings):
    """Main application settings"""

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # Project information
    APP_NAME: str = Field(default="Hotel Availability & Offer Engine")
    API_VERSION: str = Field(default="1.0.0")
    API_V1_STR: str = Field(default="/api/v1")
    CORS_ORIGINS: str = Field(default="*")

    # Include all sub-settings
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()
    pricing: PricingSettings = PricingSettings()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ['development', 'staging', 'production', 'testing']
        if v not in valid_envs:
            raise ValueError(f'Environment must be one of {valid_envs}')
        return v

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from a comma separated string"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings()


# Global settings instance
settings = get_settings()
