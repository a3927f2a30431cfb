"""
Unit Tests for Configuration Module

Tests configuration loading, validation, environment variable merging,
and settings folder resolution.

Author: SyncGuard Project
License: MIT
"""

import warnings
import pytest
import yaml
from pathlib import Path

from syncguard.config.config_loader import (
    ConfigLoader,
    debug_log_path,
    load_config,
    resolve_appdata_folder
)
from syncguard.config.schema import Config, TransferConfig, AppConfig
from syncguard.core.paths import TEMP_PREFIX


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment variables out of the loader."""
    for name in (
        "CONFIG_PATH", "APP_LOG_LEVEL", "APP_LANGUAGE", "APP_DATA_FOLDER",
        "APP_PORTABLE", "TRANSFER_TEMP_PREFIX", "NAMING_TARGET_PLATFORM",
        "SECRET_KEY", "SECRET_SALT", "APPDATA"
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigLoader:
    """Test suite for ConfigLoader class."""

    def test_create_default_config(self):
        """Test default configuration creation."""
        loader = ConfigLoader()
        default_config = loader._create_default_config()

        assert "app" in default_config
        assert "transfer" in default_config
        assert default_config["transfer"]["temp_prefix"] == "~ftpb_"
        assert default_config["app"]["log_level"] == "INFO"

    def test_load_nonexistent_config_creates_default(self, tmp_path):
        """Test that loading non-existent config creates defaults."""
        config_path = tmp_path / "config.yaml"
        loader = ConfigLoader(str(config_path))

        config = loader.load()

        assert isinstance(config, Config)
        assert config.transfer.temp_prefix == "~ftpb_"
        assert config.naming.target_platform == "host"
        assert config.app.language == "en"

    def test_load_yaml_file(self, tmp_path):
        """Test values read from a YAML file."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "app:\n"
            "  language: de\n"
            "transfer:\n"
            "  temp_prefix: .partial_\n"
            "naming:\n"
            "  target_platform: windows\n"
        )

        config = load_config(str(config_path))

        assert config.app.language == "de"
        assert config.transfer.temp_prefix == ".partial_"
        assert config.naming.target_platform == "windows"

    def test_invalid_yaml_raises(self, tmp_path):
        """Test that unparsable YAML is reported."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("app: [broken\n")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_config(str(config_path))

    def test_env_var_override(self, tmp_path, monkeypatch):
        """Test environment variable overrides."""
        monkeypatch.setenv("APP_LOG_LEVEL", "debug")
        monkeypatch.setenv("TRANSFER_TEMP_PREFIX", "~sg_")
        monkeypatch.setenv("NAMING_TARGET_PLATFORM", "POSIX")

        config_path = tmp_path / "config.yaml"
        loader = ConfigLoader(str(config_path))
        config = loader.load()

        assert config.app.log_level == "DEBUG"
        assert config.transfer.temp_prefix == "~sg_"
        assert config.naming.target_platform == "posix"

    def test_secret_generation(self, tmp_path):
        """Test that codec secrets are auto-generated."""
        loader = ConfigLoader(str(tmp_path / "config.yaml"))
        config = loader.load()

        assert config.security.secret_key is not None
        assert len(config.security.secret_key) > 20
        assert config.security.secret_salt is not None

    def test_secrets_from_env(self, tmp_path, monkeypatch):
        """Test that secrets given in the environment are kept."""
        monkeypatch.setenv("SECRET_KEY", "k" * 32)
        monkeypatch.setenv("SECRET_SALT", "pepper")

        config = load_config(str(tmp_path / "config.yaml"))

        assert config.security.secret_key == "k" * 32
        assert config.security.secret_salt == "pepper"

    def test_generated_secrets_survive_next_load(self, tmp_path):
        """Test that a second load sees the secrets generated by the first."""
        config_path = tmp_path / "config.yaml"

        first = ConfigLoader(str(config_path)).load()
        second = ConfigLoader(str(config_path)).load()

        assert config_path.exists()
        assert second.security.secret_key == first.security.secret_key
        assert second.security.secret_salt == first.security.secret_salt

    def test_generated_secrets_written_without_env_overrides(self, tmp_path, monkeypatch):
        """Test that only the security section is added to the file."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("app:\n  language: de\n")
        monkeypatch.setenv("APP_LOG_LEVEL", "DEBUG")

        config = load_config(str(config_path))

        stored = yaml.safe_load(config_path.read_text())
        assert stored["app"] == {"language": "de"}
        assert stored["security"]["secret_key"] == config.security.secret_key

    def test_env_secrets_not_written(self, tmp_path, monkeypatch):
        """Test that secrets supplied by the environment stay out of the file."""
        monkeypatch.setenv("SECRET_KEY", "from-env")
        monkeypatch.setenv("SECRET_SALT", "also-env")
        config_path = tmp_path / "config.yaml"

        load_config(str(config_path))

        assert not config_path.exists()

    def test_save_and_reload_keeps_secrets(self, tmp_path):
        """Test that saved secrets survive a reload."""
        config_path = tmp_path / "nested" / "config.yaml"
        loader = ConfigLoader(str(config_path))
        config = loader.load()

        loader.save(config)
        reloaded = loader.reload()

        assert reloaded.security.secret_key == config.security.secret_key
        assert reloaded.security.secret_salt == config.security.secret_salt
        assert reloaded.transfer.temp_prefix == config.transfer.temp_prefix


class TestConfigSchema:
    """Test suite for configuration schema models."""

    def test_temp_prefix_default_matches_paths(self):
        """Test that config and path helpers share one default marker."""
        assert TransferConfig().temp_prefix == TEMP_PREFIX
        assert ConfigLoader()._create_default_config()["transfer"]["temp_prefix"] == TEMP_PREFIX

    def test_models_build_without_deprecation_warnings(self, tmp_path):
        """Test that building and saving a config uses the current pydantic API."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            config = Config(app={"language": "fr"}, naming={"target_platform": "windows"})
            ConfigLoader(str(tmp_path / "c.yaml")).save(config)

        assert yaml.safe_load((tmp_path / "c.yaml").read_text())["naming"]["target_platform"] == "windows"

    @pytest.mark.parametrize("prefix", ["", "a/b", "x\\"])
    def test_invalid_temp_prefix(self, prefix):
        """Test that empty or separator-bearing markers are rejected."""
        with pytest.raises(ValueError):
            TransferConfig(temp_prefix=prefix)

    def test_invalid_language(self):
        """Test that language codes can't contain separators."""
        with pytest.raises(ValueError):
            AppConfig(language="en/us")

    def test_invalid_platform(self):
        """Test that unknown naming platforms are rejected."""
        with pytest.raises(ValueError):
            Config(naming={"target_platform": "amiga"})


class TestAppdataFolder:
    """Test suite for settings folder resolution."""

    def test_portable_uses_cwd(self, tmp_path, monkeypatch):
        """Test that portable mode keeps settings next to the program."""
        monkeypatch.chdir(tmp_path)
        config = Config(app={"portable": True})

        assert resolve_appdata_folder(config) == Path.cwd()

    def test_explicit_folder(self, tmp_path):
        """Test an explicitly configured folder."""
        config = Config(app={"appdata_folder": str(tmp_path)})

        assert resolve_appdata_folder(config) == tmp_path
        assert debug_log_path(config) == tmp_path / "Debug.log"

    def test_appdata_env(self, tmp_path, monkeypatch):
        """Test the Windows per-user default."""
        monkeypatch.setenv("APPDATA", str(tmp_path))

        assert resolve_appdata_folder(Config()) == tmp_path / "SyncGuard"

    def test_log_file_override(self, tmp_path):
        """Test that an explicit log path wins."""
        config = Config(app={"log_file_path": str(tmp_path / "x.log")})

        assert debug_log_path(config) == tmp_path / "x.log"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
