# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for credentials, vendor endpoints, timeouts,
locale and logging. Adapters receive these values at construction time;
nothing below the config layer reads the environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Provider credentials ===
    anthropic_api_key: str = ""
    gemini_api_key: str = ""
    openai_api_key: str = ""

    # === Vendor endpoints (point these at a relay to keep keys server-side) ===
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # === Requests ===
    request_timeout_s: float = 30.0
    max_image_file_mb: int = 20

    # === Messages ===
    locale: Literal["en", "ja"] = "en"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("request_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout_s must be > 0")
        return v

    @field_validator("max_image_file_mb")
    @classmethod
    def validate_max_image_file_mb(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_image_file_mb must be > 0")
        return v

    @field_validator("anthropic_base_url", "gemini_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # --- Helpers ---

    @property
    def max_image_file_bytes(self) -> int:
        """Upload ceiling for local image files, in bytes."""
        return self.max_image_file_mb * 1024 * 1024


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
