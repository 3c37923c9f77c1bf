"""Pytest fixtures for testing kindkit."""

import os
from unittest.mock import patch

import pytest

from kindkit.addons.catalog import Addon, AddonCatalog, AddonFile
from kindkit.addons.manager import AddonManager
from kindkit.cluster.client import NodeHost
from kindkit.config import KindkitConfig
from kindkit.settings.values import ConfigStore
from kindkit.utils.errors import RemoteDeleteError, RemoteSessionError, RemoteWriteError


class FakeSession:
    """In-memory node session that records every call."""

    def __init__(self, host: NodeHost, files: dict, fail_on: set):
        self.host = host
        self.files = files
        self.fail_on = fail_on
        self.writes: list[tuple[bytes, str, str]] = []
        self.removes: list[str] = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.closed = True

    def write_file(self, content: bytes, path: str, permissions: str) -> None:
        self.writes.append((content, path, permissions))
        if path in self.fail_on:
            raise RemoteWriteError(path, "permission denied")
        self.files[path] = (content, permissions)

    def remove_file(self, path: str, missing_ok: bool = True) -> None:
        self.removes.append(path)
        if path in self.fail_on:
            raise RemoteDeleteError(path, "device or resource busy")
        if path not in self.files:
            if missing_ok:
                return
            raise RemoteDeleteError(path, "No such file or directory")
        del self.files[path]

    def exists(self, path: str) -> bool:
        if path in self.fail_on:
            raise RemoteSessionError(
                f"Could not check {path} on {self.host.container_name}: timed out"
            )
        return path in self.files


class FakeClient:
    """Cluster client backed by a FakeNode."""

    def __init__(self, node: "FakeNode", config: KindkitConfig):
        self.node = node
        self.config = config
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.closed = True

    def container_exists(self) -> bool:
        return self.node.exists

    def is_running(self) -> bool:
        return self.node.running

    def get_host(self) -> NodeHost:
        return NodeHost(
            cluster_name=self.config.cluster_name,
            container_name=self.config.get_control_plane_container(),
        )


class FakeNode:
    """A single control-plane node shared by every client and session."""

    def __init__(self):
        self.exists = True
        self.running = True
        self.files: dict[str, tuple[bytes, str]] = {}
        self.fail_on: set[str] = set()
        self.clients: list[FakeClient] = []
        self.sessions: list[FakeSession] = []

    def client_factory(self, config: KindkitConfig) -> FakeClient:
        client = FakeClient(self, config)
        self.clients.append(client)
        return client

    def session_factory(self, host: NodeHost) -> FakeSession:
        session = FakeSession(host, self.files, self.fail_on)
        self.sessions.append(session)
        return session


@pytest.fixture
def config() -> KindkitConfig:
    """Create a configuration for testing.

    Returns:
        KindkitConfig with test values and no environment overrides
    """
    with patch.dict(os.environ, {}, clear=True), patch("kindkit.config.load_dotenv"):
        return KindkitConfig(cluster_name="test-cluster")


@pytest.fixture
def store() -> ConfigStore:
    return ConfigStore()


@pytest.fixture
def catalog() -> AddonCatalog:
    """Create a small in-memory addon catalog.

    Returns:
        Catalog with a three-file and a one-file addon
    """
    return AddonCatalog.from_addons(
        [
            Addon(
                name="dashboard",
                files=(
                    AddonFile(b"kind: Namespace\n", "/etc/kubernetes/addons/dashboard-ns.yaml"),
                    AddonFile(
                        b"kind: Deployment\n",
                        "/etc/kubernetes/addons/dashboard-dp.yaml",
                        "0600",
                    ),
                    AddonFile(
                        b"kind: Service\n",
                        "/etc/kubernetes/addons/dashboard-svc.yaml",
                        "0644",
                    ),
                ),
                description="Dashboard",
            ),
            Addon(
                name="registry",
                files=(AddonFile(b"kind: Service\n", "/etc/kubernetes/addons/registry-svc.yaml"),),
            ),
        ]
    )


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture
def manager(config: KindkitConfig, catalog: AddonCatalog, node: FakeNode) -> AddonManager:
    """Create an addon manager wired to the fake node.

    Returns:
        AddonManager using the real cluster guard against FakeClient
    """
    return AddonManager(
        config,
        catalog=catalog,
        client_factory=node.client_factory,
        session_factory=node.session_factory,
    )
