"""Config command group for azmgmt.

This module provides commands for the configuration file:
- show: Show the effective configuration
- set: Set a configuration value

Security:
- Client secrets are never stored; they come from AZURE_CLIENT_SECRET
"""

import logging

import click
from rich.console import Console
from rich.table import Table

from azmgmt.auth_models import AuthMethod
from azmgmt.click_group import AzmgmtGroup
from azmgmt.commands.cli_helpers import CliContext, handle_errors, pass_cli_context
from azmgmt.config_manager import AzmgmtConfig, ConfigError, ConfigManager

logger = logging.getLogger(__name__)

__all__ = ["config_group"]


@click.group(name="config", cls=AzmgmtGroup)
def config_group():
    """Show or change azmgmt configuration.

    Configuration is stored in ~/.azmgmt/config.toml unless --config is given.

    \b
    EXAMPLES:
        $ azmgmt config show
        $ azmgmt config set default_resource_group my-rg
        $ azmgmt config set auth_method managed_identity
    """
    pass


@config_group.command(name="show")
@pass_cli_context
def show_config(cli: CliContext):
    """Show the configuration file path and values."""
    with handle_errors():
        config_path = ConfigManager.get_config_path(cli.config_path)
        config = cli.config

    table = Table(title=f"Configuration ({config_path})", show_header=True, header_style="bold")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    values = config.to_dict()
    for key in AzmgmtConfig.field_names():
        table.add_row(key, str(values.get(key, "-")))
    Console().print(table, markup=False)


@config_group.command(name="set")
@click.argument("key", type=click.Choice(AzmgmtConfig.field_names()))
@click.argument("value")
@pass_cli_context
def set_config(cli: CliContext, key: str, value: str):
    """Set configuration KEY to VALUE.

    Use an empty string to clear an optional value.
    """
    with handle_errors():
        if key == "auth_method" and value not in [m.value for m in AuthMethod]:
            raise ConfigError(
                f"Invalid auth_method: {value}. "
                f"Expected one of: {', '.join(m.value for m in AuthMethod)}"
            )
        if value == "" and key in ("output_format", "auth_method"):
            raise ConfigError(f"{key} cannot be cleared")

        ConfigManager.update_config(cli.config_path, **{key: value or None})

    if value:
        click.echo(f"Set {key} = {value}")
    else:
        click.echo(f"Cleared {key}")
