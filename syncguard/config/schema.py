"""
Configuration Schema and Models

Defines Pydantic models for the configuration schema, providing validation,
default values, and type checking for all configuration options.

Author: SyncGuard Project
License: MIT
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.naming import TargetPlatform
from ..core.paths import TEMP_PREFIX


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppConfig(BaseModel):
    """Main application configuration."""

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application logging level"
    )
    log_to_file: bool = Field(
        default=True,
        description="Enable logging to file"
    )
    log_file_path: Optional[str] = Field(
        default=None,
        description="Debug log path (None uses <appdata>/Debug.log)"
    )
    log_rotation_size: int = Field(
        default=10485760,  # 10MB
        description="Log file size before rotation (bytes)"
    )
    log_retention_count: int = Field(
        default=5,
        description="Number of rotated log files to keep"
    )
    json_format: bool = Field(
        default=False,
        description="Use JSON formatting for log output"
    )
    language: str = Field(
        default="en",
        description="Language code used for message lookups"
    )
    portable: bool = Field(
        default=False,
        description="Keep settings and logs in the current directory"
    )
    appdata_folder: Optional[str] = Field(
        default=None,
        description="Settings folder (None uses the per-user default)"
    )

    @field_validator("language")
    @classmethod
    def validate_language(cls, v):
        """Language codes are used as catalog path segments."""
        v = v.strip()
        if not v or "/" in v:
            raise ValueError(f"Invalid language code: {v!r}")
        return v


class TransferConfig(BaseModel):
    """Transfer staging configuration."""

    temp_prefix: str = Field(
        default=TEMP_PREFIX,
        description="Marker prepended to item names while they are transferred"
    )

    @field_validator("temp_prefix")
    @classmethod
    def validate_temp_prefix(cls, v):
        """The marker must be a non-empty name fragment."""
        if not v:
            raise ValueError("temp_prefix must not be empty")
        if "/" in v or "\\" in v:
            raise ValueError(f"temp_prefix must not contain separators: {v}")
        return v


class NamingConfig(BaseModel):
    """Filename validation configuration."""

    target_platform: TargetPlatform = Field(
        default=TargetPlatform.HOST,
        description="Naming rules to enforce (host, windows or posix)"
    )


class SecurityConfig(BaseModel):
    """Credential storage configuration."""

    secret_key: Optional[str] = Field(
        default=None,
        description="Key handed to the secret codec (auto-generated if not set)"
    )
    secret_salt: Optional[str] = Field(
        default=None,
        description="Salt handed to the secret codec (auto-generated if not set)"
    )


class Config(BaseModel):
    """
    Root configuration model for SyncGuard.

    Loaded from config.yaml and overridable by environment variables.
    """

    app: AppConfig = Field(default_factory=AppConfig)
    transfer: TransferConfig = Field(default_factory=TransferConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
