"""Control-plane client for KinD clusters.

KinD nodes are containers, so the client talks to the container runtime CLI
to find out whether the cluster is up and which container hosts the control
plane.
"""

import logging
import subprocess
from dataclasses import dataclass

from kindkit.config import KindkitConfig
from kindkit.utils.errors import ContainerRuntimeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeHost:
    """A cluster node that sessions can be opened against."""

    cluster_name: str
    container_name: str
    runtime: str = "docker"


class ClusterClient:
    """Client for cluster state queries. Use as a context manager."""

    def __init__(self, config: KindkitConfig):
        """Initialize client.

        Args:
            config: kindkit configuration

        Raises:
            ContainerRuntimeError: If the container runtime CLI is not available
        """
        self.config = config
        self.runtime = config.container_runtime
        self.timeout = config.command_timeout
        self._closed = False
        self._check_runtime_available()

    def __enter__(self) -> "ClusterClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the client."""
        if not self._closed:
            logger.debug(f"Closing cluster client for '{self.config.cluster_name}'")
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_runtime_available(self) -> None:
        """Check if the container runtime CLI is available.

        Raises:
            ContainerRuntimeError: If the runtime is not available
        """
        try:
            result = subprocess.run(
                [self.runtime, "version", "--format", "{{.Client.Version}}"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
            if result.returncode != 0:
                raise ContainerRuntimeError(
                    f"{self.runtime} CLI is not available or not working correctly"
                )
            logger.debug(f"{self.runtime} version: {result.stdout.strip()}")
        except FileNotFoundError as e:
            raise ContainerRuntimeError(
                f"{self.runtime} CLI not found. Please install it to manage KinD nodes"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ContainerRuntimeError(f"{self.runtime} version check timed out") from e

    def container_exists(self) -> bool:
        """Check if the control-plane container exists.

        Returns:
            True if the container exists
        """
        container_name = self.config.get_control_plane_container()
        try:
            result = subprocess.run(
                [self.runtime, "inspect", container_name],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
            return result.returncode == 0

        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False

    def is_running(self) -> bool:
        """Check if the control-plane container is running.

        Returns:
            True if the container is running
        """
        container_name = self.config.get_control_plane_container()
        try:
            result = subprocess.run(
                [
                    self.runtime,
                    "inspect",
                    "-f",
                    "{{.State.Running}}",
                    container_name,
                ],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )

            if result.returncode == 0:
                return result.stdout.strip().lower() == "true"

            return False

        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False

    def get_host(self) -> NodeHost:
        """Get the control-plane node of the cluster.

        Returns:
            NodeHost for the control-plane container
        """
        return NodeHost(
            cluster_name=self.config.cluster_name,
            container_name=self.config.get_control_plane_container(),
            runtime=self.runtime,
        )
