"""
Settings for the resume parsing pipeline.

Every value can be set through environment variables (or a ``.env`` file);
each group reads its own prefix, e.g. ``PARSER_MAX_FILE_SIZE_MB=5`` or
``STORAGE_PROVIDER=local``.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from resume_pipeline.utils.constants import (
    APP_NAME,
    MAX_FILE_SIZE_MB,
    MIN_TEXT_LENGTH,
    VERSION,
)


ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """MongoDB holding the GridFS bucket of original documents."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "resume_pipeline"
    username: str | None = None
    password: str | None = None
    server_selection_timeout_ms: int = 5000

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    @property
    def display_address(self) -> str:
        """Host, port and database, without credentials."""
        return f"{self.host}:{self.port}/{self.name}"


class StorageSettings(BaseSettings):
    """Where uploaded originals are kept."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    # "auto" picks GridFS when database credentials are set, local storage otherwise
    provider: Literal["auto", "gridfs", "local"] = "auto"
    bucket_name: str = "resumes"

    @field_validator("bucket_name")
    @classmethod
    def validate_bucket_name(cls, v: str) -> str:
        v = v.strip()
        if not v or "/" in v:
            raise ValueError("Bucket name must be non-empty and contain no '/'")
        return v


class ParserSettings(BaseSettings):
    """Upload limits and the optional ruleset override."""

    model_config = SettingsConfigDict(env_prefix="PARSER_")

    max_file_size_mb: int = Field(default=MAX_FILE_SIZE_MB, gt=0)
    min_text_length: int = Field(default=MIN_TEXT_LENGTH, ge=0)
    ruleset_path: Optional[Path] = None

    @field_validator("ruleset_path")
    @classmethod
    def validate_ruleset_path(cls, v: Optional[Path]) -> Optional[Path]:
        if v is not None and not v.is_file():
            raise ValueError(f"Ruleset file not found: {v}")
        return v

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


class LoggingSettings(BaseSettings):
    """Loguru sinks."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "resume_pipeline.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True


class AppSettings(BaseSettings):
    """Top-level settings; groups are nested."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = APP_NAME
    version: str = VERSION
    debug: bool = False
    environment: Literal["development", "production", "testing"] = "development"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    parser: ParserSettings = Field(default_factory=ParserSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def diagnose_tracebacks(self) -> bool:
        """Expand local variables in tracebacks (they may hold resume text)."""
        return self.debug and self.environment == "development"


_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Process-wide settings, created on first use."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Re-read settings from the environment."""
    global _settings
    _settings = AppSettings()
    return _settings
