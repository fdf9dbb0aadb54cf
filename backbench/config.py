"""
Configuration settings for the Backbench learning engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Content Provider (Gemini)
    # ========================================
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
        description="Google Generative AI (Gemini) API key",
    )
    ai_model: str = Field(
        default="gemini-3-flash-preview",
        description="Model used to generate learning content",
    )
    ai_temperature: float = Field(
        default=0.4,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for content generation",
    )

    # ========================================
    # Progression Rules
    # ========================================
    restart_delay_seconds: float = Field(
        default=3.0,
        ge=0.0,
        description="Delay before a failed verification returns to practice",
    )
    verification_gate_accuracy: int = Field(
        default=60,
        ge=0,
        le=100,
        description="Practice accuracy required to enter verification",
    )
    hard_difficulty_after: int = Field(
        default=5,
        ge=0,
        description="Practice switches to hard items once this many are answered",
    )
    reflection_min_chars: int = Field(
        default=20,
        ge=1,
        description="Minimum reflection length before it can be committed",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    @property
    def has_ai_configured(self) -> bool:
        """Check if generated content is available."""
        return bool(self.gemini_api_key)

    def masked_api_key(self) -> str:
        """API key safe for display."""
        if not self.gemini_api_key:
            return "(not set)"
        return f"{self.gemini_api_key[:4]}…{'*' * 6}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
