"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from kindkit.config import KindkitConfig
from kindkit.utils.errors import ConfigurationError


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch("kindkit.config.load_dotenv"):
        yield


class TestKindkitConfig:
    """Test KindkitConfig class."""

    def test_default_configuration(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            config = KindkitConfig()

            assert config.cluster_name == "kind"
            assert config.container_runtime == "docker"
            assert config.addons_dir == "/etc/kubernetes/addons"
            assert config.addon_delete_missing_ok is True
            assert config.command_timeout == 30
            assert config.log_level == "info"

    def test_environment_variable_loading(self):
        """Test loading configuration from environment."""
        env = {
            "KINDKIT_CLUSTER_NAME": "dev",
            "KINDKIT_CONTAINER_RUNTIME": "Podman",
            "KINDKIT_ADDONS_DIR": "/opt/addons",
            "KINDKIT_DELETE_MISSING_OK": "false",
            "KINDKIT_COMMAND_TIMEOUT": "90",
            "LOG_LEVEL": "DEBUG",
        }

        with patch.dict(os.environ, env, clear=True):
            config = KindkitConfig()

            assert config.cluster_name == "dev"
            assert config.container_runtime == "podman"
            assert config.addons_dir == "/opt/addons"
            assert config.addon_delete_missing_ok is False
            assert config.command_timeout == 90
            assert config.log_level == "debug"

    def test_invalid_timeout_environment(self):
        """Test a non-integer timeout fails at load time."""
        with patch.dict(os.environ, {"KINDKIT_COMMAND_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ConfigurationError, match="KINDKIT_COMMAND_TIMEOUT"):
                KindkitConfig()

    def test_invalid_boolean_environment(self):
        """Test a mistyped boolean fails at load time instead of reading as false."""
        with patch.dict(os.environ, {"KINDKIT_DELETE_MISSING_OK": "ture"}, clear=True):
            with pytest.raises(ConfigurationError, match="KINDKIT_DELETE_MISSING_OK"):
                KindkitConfig()

    def test_boolean_environment_tokens(self):
        """Test boolean tokens are case-insensitive and trimmed."""
        with patch.dict(os.environ, {"KINDKIT_DELETE_MISSING_OK": " FALSE "}, clear=True):
            assert KindkitConfig().addon_delete_missing_ok is False

        with patch.dict(os.environ, {"KINDKIT_DELETE_MISSING_OK": "1"}, clear=True):
            assert KindkitConfig().addon_delete_missing_ok is True

    def test_validation_success(self):
        """Test validation passes with defaults."""
        with patch.dict(os.environ, {}, clear=True):
            KindkitConfig().validate()

    def test_validation_invalid_cluster_name(self):
        """Test validation rejects bad cluster names."""
        with patch.dict(os.environ, {"KINDKIT_CLUSTER_NAME": "Bad_Name"}, clear=True):
            config = KindkitConfig()

            with pytest.raises(ConfigurationError, match="Invalid cluster name"):
                config.validate()

    def test_validation_invalid_runtime(self):
        """Test validation rejects unknown runtimes."""
        with patch.dict(os.environ, {"KINDKIT_CONTAINER_RUNTIME": "lxc"}, clear=True):
            config = KindkitConfig()

            with pytest.raises(ConfigurationError, match="Invalid container runtime"):
                config.validate()

    def test_validation_invalid_timeout(self):
        """Test validation rejects non-positive timeouts."""
        with patch.dict(os.environ, {}, clear=True):
            config = KindkitConfig(command_timeout=0)

            with pytest.raises(ConfigurationError, match="positive"):
                config.validate()

    def test_validation_relative_addons_dir(self):
        """Test validation rejects relative addon directories."""
        with patch.dict(os.environ, {}, clear=True):
            config = KindkitConfig(addons_dir="addons")

            with pytest.raises(ConfigurationError, match="absolute"):
                config.validate()

    def test_control_plane_container(self):
        """Test container name derivation."""
        with patch.dict(os.environ, {}, clear=True):
            config = KindkitConfig(cluster_name="dev")

            assert config.get_control_plane_container() == "dev-control-plane"
