"""Addon management for kindkit.

An addon is a named bundle of files. Enabling it copies the files onto the
cluster's control-plane node; disabling it removes them.
"""

from kindkit.addons.catalog import Addon, AddonCatalog, AddonFile
from kindkit.addons.manager import AddonManager

__all__ = ["Addon", "AddonCatalog", "AddonFile", "AddonManager"]
