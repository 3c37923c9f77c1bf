"""Catalog of known settings and their setters."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from kindkit.config import SUPPORTED_RUNTIMES
from kindkit.settings.aggregate import apply_setting
from kindkit.settings.setters import (
    SetterFn,
    is_positive,
    is_valid_cluster_name,
    is_valid_disk_size,
    is_valid_k8s_version,
    is_valid_log_level,
    one_of,
    requires_restart,
    set_bool,
    set_int,
    set_string,
)
from kindkit.settings.values import ConfigStore
from kindkit.utils.errors import InvalidSettingValueError, UnknownSettingError

if TYPE_CHECKING:
    from kindkit.addons.manager import AddonManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Setting:
    """A named setting and the setters run when it is written."""

    name: str
    setters: tuple[SetterFn, ...]


class SettingRegistry:
    """Ordered catalog of settings, looked up by exact name."""

    def __init__(self, settings: Iterable[Setting] = ()):
        """Initialize registry.

        Args:
            settings: Settings to register, in lookup order
        """
        self._settings: list[Setting] = []
        for setting in settings:
            self.register(setting)

    def register(self, setting: Setting) -> None:
        """Add a setting to the catalog.

        Raises:
            ValueError: If a setting with the same name is already registered
        """
        if setting.name in self:
            raise ValueError(f"Setting '{setting.name}' is already registered")
        self._settings.append(setting)

    def find_setting(self, name: str) -> Setting:
        """Find a setting by exact name.

        Raises:
            UnknownSettingError: If no setting has this name
        """
        for setting in self._settings:
            if setting.name == name:
                return setting
        raise UnknownSettingError(name)

    def set(self, name: str, value: str) -> None:
        """Write a setting by running all of its setters.

        Raises:
            UnknownSettingError: If no setting has this name
            AggregatedValidationError: If any setter failed
        """
        setting = self.find_setting(name)
        logger.info(f"Setting '{name}' to {value!r}")
        apply_setting(name, value, setting.setters)

    def names(self) -> list[str]:
        return [setting.name for setting in self._settings]

    def __contains__(self, name: object) -> bool:
        return any(setting.name == name for setting in self._settings)

    def __iter__(self) -> Iterator[Setting]:
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._settings)


def addon_exists(addon_names: Iterable[str]) -> SetterFn:
    """Build a validator that checks the setting name is a known addon."""
    known = frozenset(addon_names)

    def validate(name: str, value: str) -> None:
        if name not in known:
            raise InvalidSettingValueError(f"{name} is not a valid addon")

    return validate


def build_default_registry(
    store: ConfigStore,
    addon_manager: "AddonManager | None" = None,
    addon_names: Iterable[str] | None = None,
) -> SettingRegistry:
    """Build the registry of settings known to kindkit.

    Args:
        store: Store the setters write into
        addon_manager: When given, writing an addon setting also enables or
            disables the addon on the running cluster
        addon_names: Addon names to register; defaults to the manager's catalog

    Returns:
        A new SettingRegistry
    """
    if addon_names is None:
        addon_names = addon_manager.list_addons() if addon_manager else []
    addon_names = list(addon_names)

    registry = SettingRegistry(
        [
            Setting(
                "driver",
                (one_of(SUPPORTED_RUNTIMES), partial(set_string, store), requires_restart),
            ),
            Setting("cluster-name", (is_valid_cluster_name, partial(set_string, store))),
            Setting(
                "kubernetes-version",
                (is_valid_k8s_version, partial(set_string, store), requires_restart),
            ),
            Setting("cpus", (partial(set_int, store), is_positive, requires_restart)),
            Setting("memory", (partial(set_int, store), is_positive, requires_restart)),
            Setting(
                "disk-size",
                (is_valid_disk_size, partial(set_string, store), requires_restart),
            ),
            Setting("log-level", (is_valid_log_level, partial(set_string, store))),
            Setting("wants-update-notification", (partial(set_bool, store),)),
        ]
    )

    valid_addon = addon_exists(addon_names)
    for addon_name in addon_names:
        setters: list[SetterFn] = [valid_addon, partial(set_bool, store)]
        if addon_manager is not None:
            setters.append(addon_manager.enable_or_disable)
        registry.register(Setting(addon_name, tuple(setters)))

    return registry
