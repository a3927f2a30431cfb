"""
Configuration Loader

Handles loading, parsing, and merging configuration from YAML files and
environment variables, and resolves the settings folder used for logs.

Author: SyncGuard Project
License: MIT
"""

import os
import yaml
import secrets
from pathlib import Path
from typing import Optional, Dict, Any
from dotenv import load_dotenv

from ..core.paths import TEMP_PREFIX
from .schema import Config

APP_FOLDER_NAME = "SyncGuard"
DEBUG_LOG_NAME = "Debug.log"


class ConfigLoader:
    """
    Configuration loader and manager.

    Loads configuration from YAML file, merges with environment variables,
    and validates the structure.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to the configuration file. If None, uses default location.
        """
        self.config_path = config_path or os.getenv(
            "CONFIG_PATH",
            "config.yaml"
        )
        self._config: Optional[Config] = None

        # Load environment variables from .env if present
        load_dotenv()

    def load(self) -> Config:
        """
        Load and validate configuration.

        Returns:
            Validated Config object

        Raises:
            ValueError: If YAML parsing or configuration validation fails
        """
        config_data = self._load_yaml()
        config_data = self._merge_env_vars(config_data)

        self._config = Config(**config_data)

        # Generate codec secrets if not set and keep them for the next load
        generated = {}
        if self._config.security.secret_key is None:
            generated["secret_key"] = secrets.token_urlsafe(32)
        if self._config.security.secret_salt is None:
            generated["secret_salt"] = secrets.token_hex(16)
        if generated:
            for name, value in generated.items():
                setattr(self._config.security, name, value)
            self._persist_secrets(generated)

        return self._config

    def _load_yaml(self) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Returns:
            Dictionary with configuration data
        """
        config_file = Path(self.config_path)

        if not config_file.exists():
            return self._create_default_config()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML config: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping: {config_file}")
        return data

    def _persist_secrets(self, generated: Dict[str, str]) -> None:
        """
        Write generated codec secrets back to the config file.

        Only the security section is touched, so environment overrides are
        not baked into the file. Credentials encrypted with these secrets
        stay readable after a restart.

        Args:
            generated: Secret names and their new values
        """
        config_file = Path(self.config_path)
        data = self._load_yaml()
        security = data.get("security")
        if not isinstance(security, dict):
            security = data["security"] = {}
        security.update(generated)

        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    def _create_default_config(self) -> Dict[str, Any]:
        """
        Create default configuration structure.

        Returns:
            Default configuration dictionary
        """
        return {
            "app": {
                "log_level": "INFO",
                "log_to_file": True,
                "language": "en",
                "portable": False
            },
            "transfer": {
                "temp_prefix": TEMP_PREFIX
            },
            "naming": {
                "target_platform": "host"
            },
            "security": {
                "secret_key": None,
                "secret_salt": None
            }
        }

    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge environment variables into configuration.

        Environment variables override config file values.
        Naming convention: SECTION_KEY (e.g., APP_LOG_LEVEL, TRANSFER_TEMP_PREFIX)

        Args:
            config_data: Configuration dictionary from file

        Returns:
            Merged configuration dictionary
        """
        # App settings
        if os.getenv("APP_LOG_LEVEL"):
            config_data.setdefault("app", {})["log_level"] = os.getenv("APP_LOG_LEVEL").upper()
        if os.getenv("APP_LANGUAGE"):
            config_data.setdefault("app", {})["language"] = os.getenv("APP_LANGUAGE")
        if os.getenv("APP_DATA_FOLDER"):
            config_data.setdefault("app", {})["appdata_folder"] = os.getenv("APP_DATA_FOLDER")
        if os.getenv("APP_PORTABLE"):
            config_data.setdefault("app", {})["portable"] = os.getenv("APP_PORTABLE").lower() == "true"

        # Transfer staging
        if os.getenv("TRANSFER_TEMP_PREFIX"):
            config_data.setdefault("transfer", {})["temp_prefix"] = os.getenv("TRANSFER_TEMP_PREFIX")

        # Naming rules
        if os.getenv("NAMING_TARGET_PLATFORM"):
            config_data.setdefault("naming", {})["target_platform"] = os.getenv("NAMING_TARGET_PLATFORM").lower()

        # Security
        if os.getenv("SECRET_KEY"):
            config_data.setdefault("security", {})["secret_key"] = os.getenv("SECRET_KEY")
        if os.getenv("SECRET_SALT"):
            config_data.setdefault("security", {})["secret_salt"] = os.getenv("SECRET_SALT")

        return config_data

    def save(self, config: Config, path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Config object to save
            path: Path to save to (uses default if None)
        """
        save_path = Path(path or self.config_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = config.model_dump(mode="json")

        with open(save_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

    def reload(self) -> Config:
        """
        Reload configuration from file.

        Returns:
            Reloaded Config object
        """
        return self.load()

    @property
    def config(self) -> Optional[Config]:
        """Get the current configuration object."""
        return self._config


def resolve_appdata_folder(config: Config) -> Path:
    """
    Determine the folder holding settings and the debug log.

    Portable installs keep everything next to the working directory;
    otherwise an explicit ``app.appdata_folder`` wins over the per-user
    default (``%APPDATA%`` on Windows, ``~/.config`` elsewhere).

    Args:
        config: Loaded configuration

    Returns:
        Settings folder path
    """
    if config.app.portable:
        return Path.cwd()
    if config.app.appdata_folder:
        return Path(config.app.appdata_folder)

    base = os.getenv("APPDATA")
    if base:
        return Path(base) / APP_FOLDER_NAME
    return Path.home() / ".config" / APP_FOLDER_NAME


def debug_log_path(config: Config) -> Path:
    """Path of the debug log file for this configuration."""
    if config.app.log_file_path:
        return Path(config.app.log_file_path)
    return resolve_appdata_folder(config) / DEBUG_LOG_NAME


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Convenience function to load configuration.

    Args:
        config_path: Optional path to config file

    Returns:
        Loaded and validated Config object
    """
    loader = ConfigLoader(config_path)
    return loader.load()
