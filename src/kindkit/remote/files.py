"""Batch file operations for addon file sets."""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from kindkit.remote.session import NodeSession
from kindkit.utils.errors import RemoteDeleteError, RemoteWriteError

if TYPE_CHECKING:
    from kindkit.addons.catalog import AddonFile

logger = logging.getLogger(__name__)


def transfer_files(session: NodeSession, files: "Iterable[AddonFile]") -> int:
    """Write every file to the node.

    Stops at the first failure. Files written before the failure are left on
    the node.

    Returns:
        Number of files written

    Raises:
        RemoteWriteError: For the first file that could not be written
    """
    count = 0
    for f in files:
        try:
            session.write_file(f.content, f.target_path, f.permissions)
        except RemoteWriteError:
            logger.error(f"Transfer stopped at {f.target_path} after {count} file(s)")
            raise
        except Exception as e:
            logger.error(f"Transfer stopped at {f.target_path} after {count} file(s)")
            raise RemoteWriteError(f.target_path, str(e)) from e
        count += 1
    return count


def delete_files(
    session: NodeSession, files: "Iterable[AddonFile]", missing_ok: bool = True
) -> int:
    """Remove every file from the node.

    Args:
        session: Open node session
        files: Files to remove
        missing_ok: Treat files that are already absent as removed

    Returns:
        Number of files removed

    Raises:
        RemoteDeleteError: For the first file that could not be removed
    """
    count = 0
    for f in files:
        try:
            session.remove_file(f.target_path, missing_ok=missing_ok)
        except RemoteDeleteError:
            logger.error(f"Delete stopped at {f.target_path} after {count} file(s)")
            raise
        except Exception as e:
            logger.error(f"Delete stopped at {f.target_path} after {count} file(s)")
            raise RemoteDeleteError(f.target_path, str(e)) from e
        count += 1
    return count
