"""Configuration management with pydantic-settings."""

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXCLUDE_PATTERN = r"^(_|get[A-Z]|set[A-Z])"


class CommandFileSettings(BaseSettings):
    """commandfile settings loaded from environment variables.

    All settings use the COMMANDFILE_ prefix for environment variables.
    """

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_json: bool = Field(default=False, description="Emit logs as JSON lines")

    # Command assembly
    strict: bool = Field(
        default=False,
        description="Validate assembled command definitions before returning them",
    )
    exclude_pattern: str = Field(
        default=DEFAULT_EXCLUDE_PATTERN,
        description="Regex matched against method names that must not become commands",
    )

    model_config = SettingsConfigDict(
        env_prefix="COMMANDFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("exclude_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"exclude_pattern is not a valid regex: {exc}") from exc
        return value


# Global settings instance
_settings: CommandFileSettings | None = None


def get_settings() -> CommandFileSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = CommandFileSettings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None
