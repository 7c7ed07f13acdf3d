"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

from buildconf.config import Settings, get_settings, print_settings_json


class TestSettings:
    """Test Settings class."""

    def test_default_settings(self) -> None:
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.descriptor == Path("buildconf.yaml")
        assert settings.offline is False
        assert settings.log_level == "INFO"
        assert settings.incremental_compilation is False
        assert settings.resolve_timeout == 30.0

    def test_settings_from_env(self) -> None:
        """Settings should be loadable from environment variables."""
        with patch.dict(
            os.environ,
            {
                "BUILDCONF_OFFLINE": "true",
                "BUILDCONF_LOG_LEVEL": "DEBUG",
                "BUILDCONF_INCREMENTAL_COMPILATION": "true",
                "BUILDCONF_RESOLVE_TIMEOUT": "5",
            },
        ):
            settings = Settings(_env_file=None)
            assert settings.offline is True
            assert settings.log_level == "DEBUG"
            assert settings.incremental_compilation is True
            assert settings.resolve_timeout == 5.0

    def test_descriptor_from_env(self) -> None:
        """Descriptor path should be configurable via env."""
        with patch.dict(os.environ, {"BUILDCONF_DESCRIPTOR": "/tmp/android.yaml"}):
            settings = Settings(_env_file=None)
            assert settings.descriptor == Path("/tmp/android.yaml")

    def test_unrelated_env_ignored(self) -> None:
        """Variables without the prefix should not leak in."""
        with patch.dict(os.environ, {"OFFLINE": "true"}, clear=True):
            settings = Settings(_env_file=None)
            assert settings.offline is False


class TestGetSettings:
    """Test get_settings function."""

    def test_returns_settings(self) -> None:
        """get_settings should return a Settings instance."""
        assert isinstance(get_settings(), Settings)


class TestPrintSettingsJson:
    """Test print_settings_json function."""

    def test_renders_json(self) -> None:
        """Effective settings should render as a JSON object."""
        settings = Settings(_env_file=None, offline=True)
        data = json.loads(print_settings_json(settings))

        assert data["offline"] is True
        assert data["descriptor"] == str(settings.descriptor)
        assert "incremental_compilation" in data
