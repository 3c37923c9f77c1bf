"""Table rendering utilities for kindkit."""

from rich.markup import escape
from rich.table import Table

from kindkit.addons.catalog import Addon
from kindkit.settings.registry import SettingRegistry
from kindkit.settings.values import ConfigStore, format_value


def create_settings_table(registry: SettingRegistry, store: ConfigStore) -> Table:
    """Create a table of known settings and their current values.

    Args:
        registry: Setting registry
        store: Configuration store

    Returns:
        Rich Table with one row per setting
    """
    table = Table(title="Settings")

    table.add_column("Name", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Type", style="white")

    for setting in registry:
        value = store.get(setting.name)
        if value is None:
            table.add_row(setting.name, "[dim]unset[/dim]", "")
        else:
            table.add_row(setting.name, escape(format_value(value)), value.kind)

    return table


def create_addons_table(addons: list[Addon]) -> Table:
    """Create a table for the addon catalog.

    Args:
        addons: Addons to list

    Returns:
        Rich Table with addon data
    """
    table = Table(title="Addons")

    table.add_column("Name", style="cyan")
    table.add_column("Files", style="white")
    table.add_column("Description", style="white")

    for addon in addons:
        table.add_row(addon.name, str(len(addon.files)), addon.description)

    return table
