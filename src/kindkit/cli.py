"""CLI interface for kindkit.

Provides the config and addons commands. Settings are kept in memory for the
lifetime of one invocation; writing an addon setting enables or disables the
addon on the running cluster.
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from kindkit import __version__
from kindkit.addons import AddonManager
from kindkit.config import KindkitConfig
from kindkit.display.tables import create_addons_table, create_settings_table
from kindkit.settings import ConfigStore, SettingRegistry, build_default_registry
from kindkit.settings.setters import set_string
from kindkit.settings.values import format_value
from kindkit.utils.errors import (
    AddonNotFoundError,
    AggregatedValidationError,
    KindkitError,
)

console = Console()
err_console = Console(stderr=True)


def setup_logging(log_level: str = "info") -> None:
    """Setup logging to stderr through rich.

    Args:
        log_level: Logging level (debug, info, warning, error)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=False,
                rich_tracebacks=True,
            )
        ],
        force=True,  # Override any existing config
    )


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="kindkit",
        description="kindkit - settings and addons for local KinD clusters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Override LOG_LEVEL",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"kindkit {__version__}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    config_parser = commands.add_parser("config", help="Read and write settings")
    config_commands = config_parser.add_subparsers(dest="config_command", required=True)

    set_parser = config_commands.add_parser("set", help="Write a setting")
    set_parser.add_argument("name", help="Setting name")
    set_parser.add_argument("value", help="Setting value")

    get_parser = config_commands.add_parser("get", help="Read a setting")
    get_parser.add_argument("name", help="Setting name")

    config_commands.add_parser("view", help="Show all settings")

    addons_parser = commands.add_parser("addons", help="Manage cluster addons")
    addons_commands = addons_parser.add_subparsers(dest="addons_command", required=True)

    addons_commands.add_parser("list", help="List available addons")
    for action in ("enable", "disable", "status"):
        action_parser = addons_commands.add_parser(action, help=f"{action.capitalize()} an addon")
        action_parser.add_argument("name", help="Addon name")

    return parser


def _seed_store(store: ConfigStore, config: KindkitConfig) -> None:
    """Write settings that mirror the process configuration."""
    set_string(store, "cluster-name", config.cluster_name)
    set_string(store, "driver", config.container_runtime)
    set_string(store, "log-level", config.log_level)


def _print_error(e: Exception) -> None:
    if isinstance(e, AggregatedValidationError):
        err_console.print(f"[red]Invalid value for '{escape(e.name)}':[/red]", soft_wrap=True)
        for error in e.errors:
            err_console.print(
                f" [red]• {escape(str(error))}[/red]", highlight=False, soft_wrap=True
            )
    else:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False, soft_wrap=True)


def run_config_command(
    args: argparse.Namespace, registry: SettingRegistry, store: ConfigStore
) -> int:
    """Handle config subcommands.

    Returns:
        Process exit code
    """
    if args.config_command == "set":
        registry.set(args.name, args.value)
        value = escape(format_value(store[args.name]))
        console.print(f"[green]✓[/green] {args.name} = [cyan]{value}[/cyan]", highlight=False)
        return 0

    if args.config_command == "get":
        registry.find_setting(args.name)
        value = store.get(args.name)
        if value is None:
            console.print("[dim]unset[/dim]")
        else:
            console.print(format_value(value), highlight=False, markup=False)
        return 0

    console.print(create_settings_table(registry, store))
    return 0


def run_addons_command(args: argparse.Namespace, manager: AddonManager) -> int:
    """Handle addons subcommands.

    Returns:
        Process exit code
    """
    if args.addons_command == "list":
        addons = [manager.get_addon(name) for name in manager.list_addons()]
        console.print(create_addons_table(addons))
        return 0

    if args.name not in manager.catalog:
        raise AddonNotFoundError(
            f"Unknown addon: '{args.name}'. "
            f"Available addons: {', '.join(manager.list_addons())}"
        )

    if args.addons_command == "status":
        if manager.is_enabled(args.name):
            console.print(f"{args.name}: [green]enabled[/green]")
        else:
            console.print(f"{args.name}: [dim]disabled[/dim]")
        return 0

    if args.addons_command == "enable":
        manager.enable(args.name)
        console.print(f"[green]✓[/green] {args.name} was successfully enabled")
    else:
        manager.disable(args.name)
        console.print(f"[green]✓[/green] {args.name} was successfully disabled")
    return 0


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = KindkitConfig()
        if args.log_level:
            config.log_level = args.log_level
        setup_logging(config.log_level)
        config.validate()

        manager = AddonManager(config)
        store = ConfigStore()
        registry = build_default_registry(store, addon_manager=manager)
        _seed_store(store, config)

        if args.command == "config":
            return run_config_command(args, registry, store)
        return run_addons_command(args, manager)

    except KindkitError as e:
        _print_error(e)
        return 1


def main() -> None:
    """Main entry point for CLI."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        err_console.print("\n[dim]Interrupted[/dim]")
        sys.exit(130)


if __name__ == "__main__":
    main()
