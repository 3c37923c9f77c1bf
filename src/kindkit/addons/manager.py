"""Addon manager for enabling and disabling addons on a running cluster."""

import logging
from collections.abc import Callable

from kindkit.addons.catalog import Addon, AddonCatalog
from kindkit.cluster.client import ClusterClient, NodeHost
from kindkit.cluster.guard import ensure_running
from kindkit.config import KindkitConfig
from kindkit.remote.files import delete_files, transfer_files
from kindkit.remote.session import NodeSession, open_session
from kindkit.utils.errors import (
    AddonOperationError,
    InvalidBooleanFormatError,
    InvalidToggleValueError,
    RemoteError,
)
from kindkit.utils.validation import parse_bool

logger = logging.getLogger(__name__)

ClientFactory = Callable[[KindkitConfig], ClusterClient]
SessionFactory = Callable[[NodeHost], NodeSession]
Guard = Callable[[ClusterClient], None]


class AddonManager:
    """Turns addons on or off by pushing or removing their files on the node."""

    def __init__(
        self,
        config: KindkitConfig,
        catalog: AddonCatalog | None = None,
        client_factory: ClientFactory = ClusterClient,
        session_factory: SessionFactory | None = None,
        guard: Guard = ensure_running,
    ):
        """Initialize addon manager.

        Args:
            config: kindkit configuration
            catalog: Addon catalog; defaults to the built-in catalog
            client_factory: Opens the control-plane client
            session_factory: Opens a session on a node
            guard: Raises if the cluster is not ready for addon operations
        """
        self.config = config
        self.catalog = catalog or AddonCatalog(addons_dir=config.addons_dir)
        self._client_factory = client_factory
        self._session_factory = session_factory or self._open_session
        self._guard = guard

    def _open_session(self, host: NodeHost) -> NodeSession:
        return open_session(host, timeout=self.config.command_timeout)

    def list_addons(self) -> list[str]:
        return self.catalog.names()

    def get_addon(self, name: str) -> Addon:
        return self.catalog.get(name)

    def enable_or_disable(self, name: str, value: str) -> None:
        """Enable or disable an addon from a textual boolean.

        The addon name must already be known to the catalog.

        Args:
            name: Addon name
            value: Boolean token; true enables, false disables

        Raises:
            InvalidToggleValueError: If value is not a boolean. No cluster
                access happens in this case.
            ClusterNotRunningError: If the cluster is not running. No session
                is opened in this case.
            AddonOperationError: If a file could not be written or removed
        """
        try:
            enable = parse_bool(value)
        except InvalidBooleanFormatError as e:
            raise InvalidToggleValueError(name, value) from e

        action = "Enabling" if enable else "Disabling"
        logger.info(f"{action} addon '{name}' on cluster '{self.config.cluster_name}'")

        with self._client_factory(self.config) as client:
            self._guard(client)
            addon = self.catalog.get(name)
            host = client.get_host()

            try:
                with self._session_factory(host) as session:
                    if enable:
                        count = transfer_files(session, addon.files)
                    else:
                        count = delete_files(
                            session,
                            addon.files,
                            missing_ok=self.config.addon_delete_missing_ok,
                        )
            except RemoteError as e:
                raise AddonOperationError(name, enable, e) from e

        state = "enabled" if enable else "disabled"
        logger.info(f"Addon '{name}' {state} ({count} file(s))")

    def enable(self, name: str) -> None:
        self.enable_or_disable(name, "true")

    def disable(self, name: str) -> None:
        self.enable_or_disable(name, "false")

    def is_enabled(self, name: str) -> bool:
        """Check whether every file of the addon is present on the node.

        Raises:
            ClusterNotRunningError: If the cluster is not running
            AddonNotFoundError: If the addon is not in the catalog
            RemoteSessionError: If the node did not answer
        """
        with self._client_factory(self.config) as client:
            self._guard(client)
            addon = self.catalog.get(name)
            with self._session_factory(client.get_host()) as session:
                return bool(addon.files) and all(
                    session.exists(f.target_path) for f in addon.files
                )
