"""azmgmt CLI entry point.

Wires the command groups onto the root group and configures logging and
the per-invocation CliContext.
"""

import logging

import click

from azmgmt import __version__
from azmgmt.click_group import AzmgmtGroup
from azmgmt.commands import (
    batch_group,
    compute_group,
    config_group,
    operation_status_group,
)
from azmgmt.commands.cli_helpers import CliContext
from azmgmt.config_manager import OUTPUT_FORMATS


@click.group(
    cls=AzmgmtGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--subscription", "-s", help="Subscription ID (overrides config)")
@click.option(
    "--output",
    "-o",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    help="Output format (default from config, else table)",
)
@click.option("--config", "config_path", type=click.Path(), help="Config file path")
@click.pass_context
@click.version_option(version=__version__)
def main(
    ctx: click.Context,
    verbose: bool,
    subscription: str | None,
    output_format: str | None,
    config_path: str | None,
) -> None:
    """azmgmt - Azure Batch account and Compute image management.

    \b
    BATCH ACCOUNT COMMANDS:
        batch account new             Create a Batch account
        batch account set             Update tags or auto-storage
        batch account get             Show an account
        batch account list            List accounts (tag filter, paging)
        batch account keys            Show account keys
        batch account regenerate-key  Regenerate a key
        batch account remove          Delete an account
        batch node-agent-sku list     List node agent SKUs of an account

    \b
    COMPUTE IMAGE COMMANDS:
        compute image new             Create a managed image
        compute image update          Update a managed image
        compute image get             Show an image
        compute image list            List images
        compute image remove          Delete an image
        compute methods               List invokable operations
        compute argument-list         Print an argument template
        compute invoke                Run an operation by name

    \b
    OTHER COMMANDS:
        operation-status              List or parse operation status values
        config                        Show or change configuration

    \b
    CONFIGURATION:
        Config file: ~/.azmgmt/config.toml
        Set defaults: subscription_id, default_resource_group, default_location
        Subscription precedence: --subscription, AZURE_SUBSCRIPTION_ID, config

    For help on any command: azmgmt <command> --help
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")
    if verbose:
        # Keep SDK HTTP logging at warning level
        logging.getLogger("azure").setLevel(logging.WARNING)
        logging.getLogger("msrest").setLevel(logging.WARNING)

    cli = ctx.ensure_object(CliContext)
    cli.config_path = config_path or cli.config_path
    cli.subscription_id = subscription or cli.subscription_id
    cli.output_format = output_format or cli.output_format

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


main.add_command(batch_group)
main.add_command(compute_group)
main.add_command(config_group)
main.add_command(operation_status_group)


if __name__ == "__main__":
    main()
