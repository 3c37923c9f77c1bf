"""Precondition checks for operations that need a running cluster."""

import logging

from kindkit.cluster.client import ClusterClient
from kindkit.utils.errors import ClusterNotRunningError

logger = logging.getLogger(__name__)


def ensure_running(client: ClusterClient) -> None:
    """Confirm the cluster is running.

    Args:
        client: Open cluster client

    Raises:
        ClusterNotRunningError: If the cluster does not exist or is stopped
    """
    name = client.config.cluster_name

    if not client.container_exists():
        raise ClusterNotRunningError(
            f"Cluster '{name}' not found. Create it before managing addons"
        )

    if not client.is_running():
        raise ClusterNotRunningError(
            f"Cluster '{name}' is not running. Start it before managing addons"
        )

    logger.debug(f"Cluster '{name}' is running")
