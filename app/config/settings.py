"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
import os
from typing import Optional, Dict, Any, List, Tuple
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DatabaseSettings(BaseSettings):
    """Relational store configuration"""

    # sqlite+aiosqlite for local/D1-style deployments, mysql+aiomysql for the server
    url: str = Field(default="sqlite+aiosqlite:///./idioms.db")
    echo: bool = Field(default=False)
    create_tables: bool = Field(default=True, description="Run metadata.create_all at startup")
    pool_pre_ping: bool = Field(default=True)

    model_config = {
        "env_prefix": "DATABASE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class SecuritySettings(BaseSettings):
    """CORS configuration"""

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=False)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {
        "env_prefix": "SECURITY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class ImgbbSettings(BaseSettings):
    """imgbb image host configuration"""

    api_key: Optional[str] = Field(
        default=None,
        description="imgbb API key; uploads are stubbed when unset"
    )
    api_url: str = Field(default="https://api.imgbb.com/1/upload")
    timeout_seconds: int = Field(default=30, ge=1, le=300)
    stub_url: str = Field(default="image_url_here")

    model_config = {
        "env_prefix": "IMGBB_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class ClientSettings(BaseSettings):
    """Settings used by the API client and the browse store"""

    base_url: str = Field(default="http://localhost:8000")
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    update_timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {
        "env_prefix": "CLIENT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Idiom Editor Backend")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)
    api_prefix: str = Field(default="", description="Extra mount point for the API, e.g. /api")

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")
    log_file: Optional[str] = Field(default=None)

    # Nested Settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    imgbb: ImgbbSettings = Field(default_factory=ImgbbSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('api_prefix', mode='before')
    @classmethod
    def normalize_api_prefix(cls, v):
        if not v:
            return ""
        v = "/" + str(v).strip().strip("/")
        return "" if v == "/" else v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


NESTED_SETTINGS = {
    "database": DatabaseSettings,
    "security": SecuritySettings,
    "imgbb": ImgbbSettings,
    "client": ClientSettings,
}


def env_files_for(environment: Optional[str] = None) -> Tuple[str, ...]:
    """`.env` then `.env.<environment>`; later files win, missing files are skipped"""
    environment = (environment or os.getenv("ENVIRONMENT") or Environment.DEVELOPMENT.value).lower()
    return (".env", f".env.{environment}")


def build_settings(environment: Optional[str] = None, **values: Any) -> Settings:
    """
    Build settings with every nested group reading the same env files.

    Nested groups are BaseSettings of their own, so they are constructed
    here with the same `_env_file` instead of through their default factory.
    """
    env_file = env_files_for(environment)
    for name, settings_class in NESTED_SETTINGS.items():
        values.setdefault(name, settings_class(_env_file=env_file))
    if environment:
        values.setdefault("environment", environment)
    return Settings(_env_file=env_file, **values)


# Global settings instance
settings = build_settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = build_settings()
    return settings
