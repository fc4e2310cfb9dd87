"""Configuration settings for rso_packager.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_work_dir() -> Path:
    """Return the default work directory (where staging folders live)."""
    return Path.cwd()


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the RSO_PKG_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="RSO_PKG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    work_dir: Path = Field(
        default_factory=_default_work_dir,
        description="Directory holding the staging folders and package output",
    )
    log_dir_name: str = Field(
        default="PackageManagerLogs",
        description="Name of the log folder created inside the work directory",
    )
    sample_input_name: str = Field(
        default="sample-input.json",
        description="File name of the sample input written on fatal errors",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_to_file: bool = Field(
        default=True,
        description="Write a timestamped log file for each run",
    )

    # Target device
    device_data_dir: str = Field(
        default="C:\\NCRDiagnostics\\DeviceData\\iSC350",
        description="Device data directory on the terminal",
    )
    device_name: str = Field(
        default="Ingenico iSC350 CDU",
        description="Human-readable name of the target device",
    )
    diag_utility: str = Field(
        default="NCRDiag",
        description="Utility that installs staged content on boot",
    )

    # Manifest
    manifest_command: list[str] | None = Field(
        default=None,
        description="Hashing command; the package root is appended as last argument",
    )
    manifest_timeout: int = Field(
        default=300,
        ge=1,
        description="Timeout for the manifest command (seconds)",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
