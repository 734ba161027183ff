"""Configuration settings for the gym backend."""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = Field(default="Gym Manager", env="APP_NAME")
    debug: bool = Field(default=False, env="DEBUG")
    app_env: str = Field(default="development", env="APP_ENV")

    # Database
    database_url: str = Field(default="sqlite:///./gym.db", env="DATABASE_URL")

    # Security
    jwt_secret_key: str = Field(
        default="your-jwt-secret-key-here", env="JWT_SECRET_KEY"
    )
    jwt_algorithm: str = Field(default="HS256", env="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, env="ACCESS_TOKEN_EXPIRE_MINUTES")
    refresh_token_expire_days: int = Field(default=7, env="REFRESH_TOKEN_EXPIRE_DAYS")

    # Token cache (optional, tokens are validated by signature alone when unset)
    redis_url: Optional[str] = Field(default=None, env="REDIS_URL")
    token_ttl_hours: int = Field(default=24, env="TOKEN_TTL_HOURS")

    # Member codes
    member_code_max_retries: int = Field(default=10, env="MEMBER_CODE_MAX_RETRIES")
    member_code_insert_attempts: int = Field(default=3, env="MEMBER_CODE_INSERT_ATTEMPTS")
    member_code_timezone: Optional[str] = Field(default=None, env="MEMBER_CODE_TIMEZONE")

    # Bootstrap super user created on first startup
    bootstrap_admin_username: str = Field(default="superadmin", env="BOOTSTRAP_ADMIN_USERNAME")
    bootstrap_admin_email: str = Field(default="superadmin@example.com", env="BOOTSTRAP_ADMIN_EMAIL")
    bootstrap_admin_password: str = Field(default="changeme123", env="BOOTSTRAP_ADMIN_PASSWORD")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        env="CORS_ORIGINS",
    )

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_file: Optional[str] = Field(default="gym.log", env="LOG_FILE")
    log_json: bool = Field(default=False, env="LOG_JSON")

    # Rate limits (slowapi syntax)
    login_rate_limit: str = Field(default="10/minute", env="LOGIN_RATE_LIMIT")
    password_change_rate_limit: str = Field(default="5/minute", env="PASSWORD_CHANGE_RATE_LIMIT")
    trust_forwarded_for: bool = Field(default=False, env="TRUST_FORWARDED_FOR")

    # Limits
    expiring_membership_days: int = Field(default=7, env="EXPIRING_MEMBERSHIP_DAYS")

    @property
    def environment(self) -> str:
        return self.app_env

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Create global settings instance
settings = Settings()
