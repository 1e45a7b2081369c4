"""Env var config loading with pydantic-settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from data_extractor.logging_config import get_logger
from data_extractor.utils.sanitize import resolve_encoding

logger = get_logger(__name__)


class ExtractorSettings(BaseSettings):
    """Extractor configuration loaded from env vars (and an optional .env file)."""

    model_config = SettingsConfigDict(
        env_prefix="DATA_EXTRACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "info"
    log_json: bool = True

    # Declared encoding strings are repaired against before control chars are stripped
    default_encoding: str = "utf-8"

    # YAML field definitions used by load_field_set() when no path is given
    fields_file: str = ""

    @field_validator("default_encoding")
    @classmethod
    def _normalize_encoding(cls, value: str) -> str:
        try:
            return resolve_encoding(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {value} ({exc})") from None


_settings: ExtractorSettings | None = None


def get_settings() -> ExtractorSettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings() -> ExtractorSettings:
    """Load settings from env vars (env vars override model defaults)."""
    global _settings
    _settings = ExtractorSettings()
    logger.info(
        "config_loaded",
        default_encoding=_settings.default_encoding,
        fields_file=_settings.fields_file or None,
    )
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them (for testing)."""
    global _settings
    _settings = None
