"""
Configuration management for ld-agent.

This module provides centralized configuration using Pydantic settings
with support for environment variables and .env files.
"""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult(BaseModel):
    valid: bool = True
    errors: list[str] = []
    warnings: list[str] = []


class LdAgentSettings(BaseSettings):
    """ld-agent configuration settings."""

    # Plugin settings
    plugins_directory: str = Field(default="plugins", description="Directory scanned for plugins")
    silent: bool = Field(default=False, description="Log loader progress at DEBUG level only")

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_structured: bool = Field(default=False, description="Emit JSON log records")
    log_file: str | None = Field(default=None, description="Optional log file path")

    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="LD_AGENT_",
        extra="ignore",
    )

    def get_plugins_directory(self) -> Path:
        """Get plugins directory path as Path object."""
        return Path(self.plugins_directory).expanduser().resolve()

    def get_log_file_path(self) -> Path | None:
        """Get log file path as Path object, if one is configured."""
        if not self.log_file:
            return None
        return Path(self.log_file).expanduser().resolve()

    def validate_settings(self) -> ValidationResult:
        """Validate settings and return status information."""
        status = ValidationResult()

        if self.log_level.upper() not in LOG_LEVELS:
            status.errors.append(f"Unknown log level: {self.log_level}")
            status.valid = False

        plugins_dir = self.get_plugins_directory()
        if not plugins_dir.exists():
            # A missing plugins directory just means nothing gets loaded
            status.warnings.append(f"Plugins directory does not exist: {plugins_dir}")
        elif not plugins_dir.is_dir():
            status.errors.append(f"Plugins path is not a directory: {plugins_dir}")
            status.valid = False

        return status


# Global settings instance
settings = LdAgentSettings()


def get_settings() -> LdAgentSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> LdAgentSettings:
    """Reload settings from environment and return new instance."""
    global settings
    settings = LdAgentSettings()
    return settings
