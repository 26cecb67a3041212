"""
Configuration for the authorization engine.

Settings are read from the environment (prefix ``NEO_AUTHZ_``) or a ``.env``
file so every service embedding the engine configures it the same way.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class AuthorizationSettings(BaseSettings):
    """Settings for the permission cache, the durable store and logging."""
    
    model_config = SettingsConfigDict(
        env_prefix="NEO_AUTHZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Permission cache
    permission_cache_ttl: int = Field(default=300, description="Seconds a cached role/permission set stays valid")
    cache_key_prefix: str = Field(default="neo_authz")
    redis_url: Optional[str] = Field(default=None)
    
    # Durable store
    database_url: Optional[str] = Field(default=None)
    admin_schema: str = Field(default="admin")
    db_pool_min_size: int = Field(default=5)
    db_pool_max_size: int = Field(default=20)
    db_command_timeout: int = Field(default=60)
    
    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT)
    
    @field_validator("permission_cache_ttl")
    @classmethod
    def _ttl_must_be_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("permission_cache_ttl must be positive")
        return value
    
    @field_validator("cache_key_prefix")
    @classmethod
    def _prefix_must_not_contain_wildcards(cls, value: str) -> str:
        if not value or any(char in value for char in "*?[]"):
            raise ValueError("cache_key_prefix must be non-empty and free of glob characters")
        return value
    
    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> AuthorizationSettings:
    """Get the process-wide settings instance."""
    return AuthorizationSettings()
