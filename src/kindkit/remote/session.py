"""Shell sessions on cluster nodes.

A session runs commands inside a node container through the container
runtime's exec command. File contents are streamed over stdin.
"""

import logging
import posixpath
import re
import shlex
import subprocess

from kindkit.cluster.client import NodeHost
from kindkit.utils.errors import RemoteDeleteError, RemoteSessionError, RemoteWriteError

logger = logging.getLogger(__name__)

_PERMISSIONS_PATTERN = re.compile(r"[0-7]{3,4}")


class NodeSession:
    """Session on one node. Use as a context manager."""

    def __init__(self, host: NodeHost, timeout: int = 30):
        """Initialize session.

        Args:
            host: Node to run commands on
            timeout: Timeout in seconds for each command
        """
        self.host = host
        self.timeout = timeout
        self._closed = False

    def __enter__(self) -> "NodeSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if not self._closed:
            logger.debug(f"Closing session on {self.host.container_name}")
            self._closed = True

    def _exec(self, script: str, stdin: bytes | None = None) -> subprocess.CompletedProcess[bytes]:
        """Run a shell script inside the node container.

        Raises:
            RemoteSessionError: If the session is closed
            subprocess.TimeoutExpired: If the command does not finish in time
            FileNotFoundError: If the runtime CLI is missing
        """
        if self._closed:
            raise RemoteSessionError(f"Session on {self.host.container_name} is closed")

        cmd = [self.host.runtime, "exec"]
        if stdin is not None:
            cmd.append("-i")
        cmd.extend([self.host.container_name, "sh", "-c", script])
        logger.debug(f"Running on {self.host.container_name}: {script}")

        return subprocess.run(
            cmd,
            input=stdin,
            capture_output=True,
            timeout=self.timeout,
            check=False,
        )

    def check(self) -> None:
        """Verify the node accepts commands.

        Raises:
            RemoteSessionError: If the node cannot be reached
        """
        try:
            result = self._exec("true")
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            raise RemoteSessionError(
                f"Could not open session on {self.host.container_name}: {e}"
            ) from e

        if result.returncode != 0:
            error_msg = result.stderr.decode(errors="replace").strip()
            raise RemoteSessionError(
                f"Could not open session on {self.host.container_name}: {error_msg}"
            )

    def write_file(self, content: bytes, path: str, permissions: str) -> None:
        """Write content to path on the node, creating parent directories.

        Args:
            content: File content
            path: Absolute target path
            permissions: Octal mode such as "0640"

        Raises:
            RemoteWriteError: If the file could not be written
        """
        if not _PERMISSIONS_PATTERN.fullmatch(permissions):
            raise RemoteWriteError(path, f"invalid permissions {permissions!r}")

        quoted = shlex.quote(path)
        script = (
            f"mkdir -p {shlex.quote(posixpath.dirname(path) or '/')} && "
            f"cat > {quoted} && chmod {permissions} {quoted}"
        )

        try:
            result = self._exec(script, stdin=content)
        except subprocess.TimeoutExpired as e:
            raise RemoteWriteError(path, f"timed out after {self.timeout} seconds") from e
        except FileNotFoundError as e:
            raise RemoteWriteError(path, f"{self.host.runtime} CLI not found") from e

        if result.returncode != 0:
            raise RemoteWriteError(path, result.stderr.decode(errors="replace").strip())

        logger.debug(f"Wrote {len(content)} bytes to {path} ({permissions})")

    def remove_file(self, path: str, missing_ok: bool = True) -> None:
        """Remove path from the node.

        Args:
            path: Absolute target path
            missing_ok: Treat an absent file as already removed

        Raises:
            RemoteDeleteError: If the file could not be removed
        """
        flag = "-f " if missing_ok else ""
        try:
            result = self._exec(f"rm {flag}{shlex.quote(path)}")
        except subprocess.TimeoutExpired as e:
            raise RemoteDeleteError(path, f"timed out after {self.timeout} seconds") from e
        except FileNotFoundError as e:
            raise RemoteDeleteError(path, f"{self.host.runtime} CLI not found") from e

        if result.returncode != 0:
            raise RemoteDeleteError(path, result.stderr.decode(errors="replace").strip())

        logger.debug(f"Removed {path}")

    def exists(self, path: str) -> bool:
        """Check whether path exists on the node.

        Raises:
            RemoteSessionError: If the node did not answer
        """
        try:
            result = self._exec(f"test -e {shlex.quote(path)}")
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            raise RemoteSessionError(
                f"Could not check {path} on {self.host.container_name}: {e}"
            ) from e

        # test exits 1 when the path is absent; anything else is an exec failure
        if result.returncode not in (0, 1):
            error_msg = result.stderr.decode(errors="replace").strip()
            raise RemoteSessionError(
                f"Could not check {path} on {self.host.container_name}: {error_msg}"
            )
        return result.returncode == 0


def open_session(host: NodeHost, timeout: int = 30) -> NodeSession:
    """Open a session on a node and verify it accepts commands.

    Raises:
        RemoteSessionError: If the node cannot be reached
    """
    session = NodeSession(host, timeout=timeout)
    try:
        session.check()
    except RemoteSessionError:
        session.close()
        raise
    logger.debug(f"Opened session on {host.container_name}")
    return session
