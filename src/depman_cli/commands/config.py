"""depman configuration commands."""

import sys

import click
from rich.markup import escape
from rich.table import Table

from ..config import get_config, set_log_level, update_config
from ..utils.console import _get_console, _rich_error, _rich_success

# CLI key -> config.json key
CONFIG_KEYS = {
    "manifest-file": "manifest_file",
    "lockfile": "lockfile",
    "log-level": "log_level",
}


@click.group(help="⚙️  Show or change depman configuration")
def config():
    """depman configuration commands."""
    pass


@config.command(name="show", help="📋 Show current configuration")
def show():
    current = get_config()
    table = Table(title="⚙️  depman Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="bold white")
    table.add_column("Value", style="yellow")
    for key, stored_key in CONFIG_KEYS.items():
        table.add_row(key, escape(str(current[stored_key])))
    _get_console().print(table)


@config.command(name="set", help="✏️  Set a configuration value")
@click.argument("key", type=click.Choice(list(CONFIG_KEYS)))
@click.argument("value")
def set_value(key: str, value: str):
    """Store KEY in the user config file.

    Log levels are validated; file names are stored as given.
    """
    if key == "log-level":
        try:
            set_log_level(value)
        except ValueError as e:
            _rich_error(str(e))
            sys.exit(1)
        value = value.upper()
    else:
        update_config({CONFIG_KEYS[key]: value})
    _rich_success(f"Set {key} to {value}")
