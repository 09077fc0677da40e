"""Runtime configuration — env-driven.

Centralized config using pydantic-settings for environment variable
support. Reads from .env file and RECOVERYLEDGER_* environment variables.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Standard ``logging`` level names accepted by the CLI and config."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LedgerConfig(BaseSettings):
    """Configuration with environment variable overrides.

    All settings can be overridden via RECOVERYLEDGER_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export RECOVERYLEDGER_LOG_LEVEL=DEBUG
        export RECOVERYLEDGER_MAX_BUFFER_BYTES=1048576

    Or via .env file::

        RECOVERYLEDGER_DEFAULT_CORRUPTION_LEVEL=60
        RECOVERYLEDGER_FORCE_FALLBACK_DIGEST=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RECOVERYLEDGER_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: LogLevel = LogLevel.INFO

    # Engine bounds
    max_buffer_bytes: int = Field(default=256 * 1024 * 1024, gt=0)
    default_corruption_level: int = Field(default=30, ge=0, le=100)

    # Start every digester in the degraded rolling-hash mode.
    # Chains built this way are NOT cryptographically tamper-evident.
    force_fallback_digest: bool = False

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _enforce_production_constraints(self) -> LedgerConfig:
        # A degraded digester cannot back a tamper-evident ledger.
        if self.is_production and self.force_fallback_digest:
            raise ValueError(
                "force_fallback_digest must be disabled when environment is 'production'."
            )
        return self


# Module-level singleton; import as `from recoveryledger.config import config`
config = LedgerConfig()
