"""
Notes Proxy — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; required values are checked by the
       application lifespan before the server accepts traffic.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from notes_proxy.exceptions import ConfigurationMissingError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value except the Gemini API key has a development default.
    Attributes are grouped by concern.
    """

    # ── Google Gemini ─────────────────────────────────────────────────────
    # Required: YES. Absence is a fatal startup condition.
    # How to obtain: https://aistudio.google.com/app/apikey
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key used for revision and synthesis",
    )

    gemini_model: str = Field(default="gemini-1.5-flash")

    # Generation parameters, passed through to the provider unchanged
    gemini_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    gemini_top_p: float = Field(default=0.95, ge=0.0, le=1.0)
    gemini_top_k: int = Field(default=64, ge=1)
    gemini_max_output_tokens: int = Field(default=8192, ge=1)

    # Applied to harassment, hate speech, sexually explicit and dangerous content.
    # Must be a HarmBlockThreshold member name.
    gemini_safety_threshold: str = Field(default="BLOCK_MEDIUM_AND_ABOVE")

    # Upper bound in seconds for a single generation call
    generation_timeout: float = Field(default=60.0, gt=0, le=600)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated values (parsed by the properties below)
    cors_origins: str = Field(
        default=(
            "capacitor://localhost,ionic://localhost,"
            "http://localhost,http://localhost:8100"
        )
    )
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: str = Field(default="GET,HEAD,PUT,PATCH,POST,DELETE")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def cors_methods_list(self) -> List[str]:
        return [m.strip().upper() for m in self.cors_allow_methods.split(",") if m.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("gemini_safety_threshold")
    @classmethod
    def validate_safety_threshold(cls, v: str) -> str:
        valid = {
            "BLOCK_NONE",
            "BLOCK_ONLY_HIGH",
            "BLOCK_MEDIUM_AND_ABOVE",
            "BLOCK_LOW_AND_ABOVE",
        }
        upper = v.upper()
        if upper not in valid:
            raise ValueError(
                f"Invalid gemini_safety_threshold '{v}'. Must be one of: {sorted(valid)}"
            )
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required(self) -> None:
        """
        What:  Validates that settings without a usable default are configured.
        When:  Called during app startup (lifespan) and by the provider factory.
        Raises:
            ConfigurationMissingError listing every missing setting.
        """
        missing = []
        if not self.gemini_api_key.strip() or self.gemini_api_key == "your_gemini_api_key_here":
            missing.append("GEMINI_API_KEY")
        if missing:
            raise ConfigurationMissingError(settings=missing)


# Singleton instance, imported throughout the application
settings = Settings()
