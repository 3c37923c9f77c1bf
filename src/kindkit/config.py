"""Configuration management for kindkit.

This module handles process configuration loaded from environment variables and
.env files. It describes where the cluster lives and how to reach its nodes; the
user-facing settings store is in kindkit.settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from kindkit.utils.errors import ConfigurationError, InvalidBooleanFormatError
from kindkit.utils.validation import parse_bool, validate_cluster_name

SUPPORTED_RUNTIMES = ("docker", "podman")


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean environment variable.

    Raises:
        ConfigurationError: If the value is not a boolean token
    """
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return parse_bool(value.strip())
    except InvalidBooleanFormatError as e:
        raise ConfigurationError(f"{name} must be a boolean, got {value!r}") from e


@dataclass
class KindkitConfig:
    """kindkit configuration.

    Loads configuration from environment variables after initialization.
    """

    # Cluster Configuration
    cluster_name: str = "kind"
    container_runtime: str = "docker"

    # Addon Configuration
    addons_dir: str = "/etc/kubernetes/addons"
    addon_delete_missing_ok: bool = True

    # Process Configuration
    command_timeout: int = 30
    log_level: str = "info"

    def __post_init__(self):
        """Load configuration from environment variables after initialization."""
        # Load .env file if present
        load_dotenv()

        self.cluster_name = os.getenv("KINDKIT_CLUSTER_NAME", self.cluster_name)
        self.container_runtime = os.getenv(
            "KINDKIT_CONTAINER_RUNTIME", self.container_runtime
        ).lower()
        self.addons_dir = os.getenv("KINDKIT_ADDONS_DIR", self.addons_dir)
        self.addon_delete_missing_ok = _env_bool(
            "KINDKIT_DELETE_MISSING_OK", self.addon_delete_missing_ok
        )
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).lower()

        timeout = os.getenv("KINDKIT_COMMAND_TIMEOUT")
        if timeout is not None:
            try:
                self.command_timeout = int(timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"KINDKIT_COMMAND_TIMEOUT must be an integer, got {timeout!r}"
                ) from e

    def validate(self) -> None:
        """Validate configuration.

        Raises:
            ConfigurationError: If a value is out of range or malformed.
        """
        try:
            validate_cluster_name(self.cluster_name)
        except ValueError as e:
            raise ConfigurationError(f"Invalid cluster name: {e}") from e

        if self.container_runtime not in SUPPORTED_RUNTIMES:
            raise ConfigurationError(
                f"Invalid container runtime: {self.container_runtime}. "
                f"Must be one of: {', '.join(SUPPORTED_RUNTIMES)}"
            )

        if self.command_timeout <= 0:
            raise ConfigurationError("Command timeout must be a positive number of seconds")

        if not self.addons_dir.startswith("/"):
            raise ConfigurationError(f"Addons directory must be absolute: {self.addons_dir}")

    def get_control_plane_container(self) -> str:
        """Get the control-plane node container name for the cluster.

        Returns:
            Container name such as "kind-control-plane"
        """
        return f"{self.cluster_name}-control-plane"
