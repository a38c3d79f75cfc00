"""Batch account CLI commands.

This module provides commands for managing Azure Batch accounts:
- Create, update, get, list and remove accounts
- Show and regenerate account keys
- List node agent SKUs supported by an account
"""

import logging

import click

from azmgmt.batch.account_client import KEY_TYPES
from azmgmt.batch.node_agent_skus import NodeAgentSkuClient
from azmgmt.click_group import AzmgmtGroup
from azmgmt.commands.cli_helpers import CliContext, handle_errors, pass_cli_context, what_if
from azmgmt.config_manager import ConfigError

logger = logging.getLogger(__name__)

__all__ = ["batch_group"]


@click.group(name="batch", cls=AzmgmtGroup)
def batch_group():
    """Manage Azure Batch resources."""
    pass


@batch_group.group(name="account", cls=AzmgmtGroup)
def account_group():
    """Manage Azure Batch accounts.

    When --resource-group is omitted, commands that act on an existing
    account look up its resource group automatically.

    \b
    COMMANDS:
        new             Create a Batch account
        set             Update tags or auto-storage of an account
        get             Show an account
        list            List accounts (optionally filtered by tag)
        keys            Show account keys
        regenerate-key  Regenerate the primary or secondary key
        remove          Delete an account

    \b
    EXAMPLES:
        $ azmgmt batch account new mybatch --rg my-rg --location westus2
        $ azmgmt batch account list --tag env=prod
        $ azmgmt batch account regenerate-key mybatch --key-type Primary
    """
    pass


resource_group_option = click.option(
    "--resource-group", "--rg", "resource_group", help="Resource group (looked up if omitted)"
)


@account_group.command(name="new")
@click.argument("account_name")
@click.option("--location", "-l", help="Azure region (defaults to config default_location)")
@resource_group_option
@click.option("--tag", "-t", "tags", multiple=True, help="Tag as key=value (repeatable)")
@click.option("--storage-account-id", help="Resource ID of the auto-storage account")
@click.option(
    "--what-if", "what_if_flag", is_flag=True, help="Show what would happen without creating"
)
@pass_cli_context
def new_account(
    cli: CliContext,
    account_name: str,
    location: str | None,
    resource_group: str | None,
    tags: tuple[str, ...],
    storage_account_id: str | None,
    what_if_flag: bool,
):
    """Create a new Batch account.

    \b
    Examples:
      $ azmgmt batch account new mybatch --rg my-rg --location westus2
      $ azmgmt batch account new mybatch --rg my-rg -l eastus -t env=dev -t team=hpc
    """
    with handle_errors():
        rg = cli.resource_group(resource_group)
        region = cli.location(location)
        if not rg:
            raise ConfigError("Resource group required. Use --resource-group or set in config.")
        if not region:
            raise ConfigError("Location required. Use --location or set in config.")

        if what_if_flag:
            what_if("New Batch account", account_name)
            return

        account = cli.batch_accounts().create_account(
            rg, account_name, region, tags=list(tags), storage_account_id=storage_account_id
        )
        cli.renderer().batch_account(account)


@account_group.command(name="set")
@click.argument("account_name")
@resource_group_option
@click.option("--tag", "-t", "tags", multiple=True, help="Replacement tag as key=value")
@click.option("--clear-tags", is_flag=True, help="Remove all tags")
@click.option("--storage-account-id", help="Resource ID of the auto-storage account")
@pass_cli_context
def set_account(
    cli: CliContext,
    account_name: str,
    resource_group: str | None,
    tags: tuple[str, ...],
    clear_tags: bool,
    storage_account_id: str | None,
):
    """Update tags or auto-storage of a Batch account.

    Tags given with --tag replace all existing tags.

    \b
    Examples:
      $ azmgmt batch account set mybatch -t env=prod
      $ azmgmt batch account set mybatch --clear-tags
    """
    with handle_errors():
        if tags and clear_tags:
            raise ValueError("--tag and --clear-tags cannot be used together")

        new_tags: list[str] | None = None
        if tags:
            new_tags = list(tags)
        elif clear_tags:
            new_tags = []

        account = cli.batch_accounts().update_account(
            resource_group,
            account_name,
            tags=new_tags,
            storage_account_id=storage_account_id,
        )
        cli.renderer().batch_account(account)


@account_group.command(name="get")
@click.argument("account_name")
@resource_group_option
@pass_cli_context
def get_account(cli: CliContext, account_name: str, resource_group: str | None):
    """Show a Batch account."""
    with handle_errors():
        account = cli.batch_accounts().get_account(resource_group, account_name)
        cli.renderer().batch_account(account)


@account_group.command(name="list")
@resource_group_option
@click.option("--tag", "-t", help="Filter by tag: key or key=value")
@click.option(
    "--max-count",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Maximum number of accounts (0 = all)",
)
@pass_cli_context
def list_accounts(cli: CliContext, resource_group: str | None, tag: str | None, max_count: int):
    """List Batch accounts in the subscription or a resource group.

    \b
    Examples:
      $ azmgmt batch account list
      $ azmgmt batch account list --rg my-rg --tag env=prod
    """
    with handle_errors():
        accounts = cli.batch_accounts().list_accounts(
            tag=tag, resource_group=resource_group, max_count=max_count
        )
        cli.renderer().batch_accounts(accounts)


@account_group.command(name="keys")
@click.argument("account_name")
@resource_group_option
@pass_cli_context
def account_keys(cli: CliContext, account_name: str, resource_group: str | None):
    """Show the primary and secondary keys of a Batch account."""
    with handle_errors():
        account = cli.batch_accounts().list_keys(resource_group, account_name)
        cli.renderer().batch_account(account, show_keys=True)


@account_group.command(name="regenerate-key")
@click.argument("account_name")
@resource_group_option
@click.option(
    "--key-type",
    required=True,
    type=click.Choice(KEY_TYPES, case_sensitive=False),
    help="Key to regenerate",
)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@pass_cli_context
def regenerate_key(
    cli: CliContext, account_name: str, resource_group: str | None, key_type: str, yes: bool
):
    """Regenerate the primary or secondary key of a Batch account.

    Clients using the old key stop working once it is regenerated.
    """
    if not yes:
        click.confirm(
            f"Regenerate the {key_type} key of Batch account '{account_name}'?", abort=True
        )
    with handle_errors():
        account = cli.batch_accounts().regenerate_key(
            resource_group, account_name, key_type
        )
        cli.renderer().batch_account(account, show_keys=True)


@account_group.command(name="remove")
@click.argument("account_name")
@resource_group_option
@click.option("--force", "-f", is_flag=True, help="Skip confirmation prompt")
@click.option("--no-wait", is_flag=True, help="Return without waiting for the deletion")
@pass_cli_context
def remove_account(
    cli: CliContext, account_name: str, resource_group: str | None, force: bool, no_wait: bool
):
    """Delete a Batch account.

    \b
    Examples:
      $ azmgmt batch account remove mybatch
      $ azmgmt batch account remove mybatch --rg my-rg --force --no-wait
    """
    if not force:
        click.confirm(
            f"Delete Batch account '{account_name}'? This cannot be undone", abort=True
        )
    with handle_errors():
        handle = cli.batch_accounts().delete_account(
            resource_group, account_name, no_wait=no_wait
        )
        if handle is not None:
            cli.renderer().operation(handle)
        else:
            click.echo(f"Batch account '{account_name}' deleted.")


@batch_group.group(name="node-agent-sku", cls=AzmgmtGroup)
def node_agent_sku_group():
    """Inspect node agent SKUs supported by a Batch account.

    \b
    EXAMPLES:
        $ azmgmt batch node-agent-sku list --account mybatch
        $ azmgmt batch node-agent-sku list -a mybatch --filter "osType eq 'linux'"
    """
    pass


@node_agent_sku_group.command(name="list")
@click.option("--account", "-a", "account_name", required=True, help="Batch account name")
@resource_group_option
@click.option("--filter", "filter_clause", help="OData filter on supported images")
@click.option(
    "--max-count",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Maximum number of SKUs (0 = all)",
)
@pass_cli_context
def list_node_agent_skus(
    cli: CliContext,
    account_name: str,
    resource_group: str | None,
    filter_clause: str | None,
    max_count: int,
):
    """List node agent SKUs and the images verified for each."""
    with handle_errors():
        account = cli.batch_accounts().list_keys(resource_group, account_name)
        skus = NodeAgentSkuClient.from_account(account).list_node_agent_skus(
            filter_clause, max_count=max_count
        )
        cli.renderer().node_agent_skus(skus)
