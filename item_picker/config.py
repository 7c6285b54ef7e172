"""
Item picker configuration from environment.

Every setting can be overridden with a PICKER_-prefixed environment variable
or a .env file next to the process.
"""

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .http_utils import DEFAULT_HTTP_TIMEOUT
from .validation import DEFAULT_LIMIT, MAX_LIMIT, validate_limit_field, validate_timeout_field


class PickerSettings(BaseSettings):
    """Service and client configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PICKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    data_file: Optional[str] = None
    default_limit: int = DEFAULT_LIMIT
    max_limit: int = MAX_LIMIT

    # Client
    base_url: str = "http://localhost:8000"
    client_timeout: float = DEFAULT_HTTP_TIMEOUT

    @field_validator("default_limit")
    @classmethod
    def validate_default_limit(cls, v: int) -> int:
        return validate_limit_field(v)

    @field_validator("client_timeout")
    @classmethod
    def validate_client_timeout(cls, v: float) -> float:
        return validate_timeout_field(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
