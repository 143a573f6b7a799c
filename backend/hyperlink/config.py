"""
Configuration Management Module

Configures application parameters via environment variables or .env file.
Supports the in-memory (default) and Redis message storage backends.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hyperlink.common.utils import parse_size_in_bytes
from hyperlink.domain.storage import (
    MemoryStorageConfig,
    RedisStorageConfig,
    StorageConfig,
)


class Settings(BaseSettings):
    """
    Application Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "Hyperlink"
    DEBUG: bool = False
    # One of DEBUG, INFO, WARNING, ERROR
    LOG_LEVEL: str = "INFO"

    # HTTP Server Config
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 8080
    # Max upload size in bytes, also accepts e.g. "10MB". 0 disables the limit.
    MAX_UPLOAD_SIZE: int = Field(0, ge=0)

    # Storage Config
    # Storage backend: "memory" keeps messages in process, "external-kv" (or "redis") uses Redis
    STORAGE_CLIENT: str = "memory"
    # Time to live for messages (seconds, default 48 hours)
    STORAGE_TTL_SECONDS: float = Field(48 * 3600, gt=0)
    # Length of generated message keys
    STORAGE_KEY_LENGTH: int = Field(12, ge=1)

    # In-memory backend: how often to prune expired messages (seconds)
    STORAGE_MEMORY_PRUNE_INTERVAL_SECONDS: float = Field(300, gt=0)

    # Redis backend
    STORAGE_REDIS_ADDR: str = "localhost:6379"
    STORAGE_REDIS_DB: int = Field(0, ge=0, le=15)
    STORAGE_REDIS_PASSWORD: str = ""

    @field_validator("MAX_UPLOAD_SIZE", mode="before")
    @classmethod
    def _parse_upload_size(cls, v):
        if isinstance(v, str):
            return parse_size_in_bytes(v)
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    def storage_config(self) -> StorageConfig:
        """Build the storage factory configuration"""
        return StorageConfig(
            client=self.STORAGE_CLIENT,
            ttl=timedelta(seconds=self.STORAGE_TTL_SECONDS),
            key_length=self.STORAGE_KEY_LENGTH,
            memory=MemoryStorageConfig(
                prune_interval=timedelta(
                    seconds=self.STORAGE_MEMORY_PRUNE_INTERVAL_SECONDS
                ),
            ),
            redis=RedisStorageConfig(
                addr=self.STORAGE_REDIS_ADDR,
                db=self.STORAGE_REDIS_DB,
                password=self.STORAGE_REDIS_PASSWORD,
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
