"""Settings store for kindkit.

Settings are named entries validated and applied through one or more setter
functions. Every setter runs on each write and all failures are reported
together.
"""

from kindkit.settings.aggregate import apply_setting
from kindkit.settings.registry import Setting, SettingRegistry, build_default_registry
from kindkit.settings.values import BoolValue, ConfigStore, ConfigValue, IntValue, StringValue

__all__ = [
    "BoolValue",
    "ConfigStore",
    "ConfigValue",
    "IntValue",
    "Setting",
    "SettingRegistry",
    "StringValue",
    "apply_setting",
    "build_default_registry",
]
