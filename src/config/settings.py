"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.constants import (
    DEFAULT_CV_BLOB_NAME,
    DEFAULT_CV_CONTAINER,
    TURNSTILE_VERIFY_URL,
)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CV Gate"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @model_validator(mode="after")
    def validate_timeouts_positive(self) -> "Settings":
        if self.turnstile_timeout <= 0:
            raise ValueError(f"turnstile_timeout must be positive, got {self.turnstile_timeout}")
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).warning(
                "allowed_origins is set to ['*'], consider restricting in production"
            )
        return self

    # CORS
    allowed_origins: list[str] = ["*"]

    # Cloudflare Turnstile
    turnstile_secret: str = ""
    turnstile_verify_url: str = TURNSTILE_VERIFY_URL
    turnstile_timeout: float = 10.0
    turnstile_send_remote_ip: bool = False

    # CV document
    cv_container: str = DEFAULT_CV_CONTAINER
    cv_blob_name: str = DEFAULT_CV_BLOB_NAME

    # Azure Storage
    blob_connection_string: str = Field(
        default="",
        validation_alias=AliasChoices("blob_connection_string", "BlobConnectionString"),
    )
    azure_storage_account_url: str = ""


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
