"""Settings and addon management for local KinD clusters.

kindkit keeps a small typed settings store and turns addons on or off on a
running cluster by pushing or removing their files on the control-plane node.
"""

from importlib.metadata import PackageNotFoundError, version

from kindkit.addons import AddonCatalog, AddonManager
from kindkit.config import KindkitConfig
from kindkit.settings import ConfigStore, SettingRegistry, build_default_registry

# Read version from package metadata with fallback
try:
    __version__ = version("kindkit")
except PackageNotFoundError:
    # Fallback for development/testing environments
    __version__ = "0.1.0"

__all__ = [
    "AddonCatalog",
    "AddonManager",
    "ConfigStore",
    "KindkitConfig",
    "SettingRegistry",
    "__version__",
    "build_default_registry",
]
