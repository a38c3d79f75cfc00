"""Compute CLI commands.

This module provides commands for Azure Compute managed images:
- image new/update: Create or update an image from a JSON description
- image get/list/remove: Inspect and delete images
- methods/argument-list/invoke: Run image operations by method name
"""

import logging
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from azmgmt import image_mapper
from azmgmt.click_group import AzmgmtGroup
from azmgmt.commands.cli_helpers import (
    CliContext,
    handle_errors,
    load_json_input,
    pass_cli_context,
    what_if,
)
from azmgmt.compute import methods
from azmgmt.output import to_json

logger = logging.getLogger(__name__)

__all__ = ["compute_group"]


@click.group(name="compute", cls=AzmgmtGroup)
def compute_group():
    """Manage Azure Compute resources.

    \b
    COMMANDS:
        image           Manage managed images
        methods         List operations available to invoke
        argument-list   Print an argument template for an operation
        invoke          Run an operation by name

    \b
    EXAMPLES:
        $ azmgmt compute image list --rg my-rg
        $ azmgmt compute argument-list ImageCreateOrUpdate > args.json
        $ azmgmt compute invoke ImageCreateOrUpdate --argument-list args.json
      $ azmgmt compute invoke ImageDelete my-rg my-image --force
    """
    pass


@compute_group.group(name="image", cls=AzmgmtGroup)
def image_group():
    """Manage Azure Compute managed images.

    IMAGE_FILE is a JSON image description in ARM (camelCase) or
    snake_case form. Use - to read it from stdin.

    \b
    EXAMPLES:
        $ azmgmt compute image new my-rg my-image image.json
        $ azmgmt compute image get my-rg my-image --output json | azmgmt compute image update my-rg my-image -
    """
    pass


def _create_or_update(
    cli: CliContext,
    resource_group: str,
    image_name: str,
    image_file: str,
    action: str,
    run_what_if: bool,
    no_wait: bool = False,
) -> None:
    data = load_json_input(image_file)
    with handle_errors():
        image = image_mapper.from_dict(data)
        if run_what_if:
            what_if(action, f"{resource_group}/{image_name}")
            return

        result = cli.images().create_or_update(resource_group, image_name, image, no_wait=no_wait)
        cli.renderer().result(result)


@image_group.command(name="new")
@click.argument("resource_group")
@click.argument("image_name")
@click.argument("image_file")
@click.option("--no-wait", is_flag=True, help="Return without waiting for completion")
@click.option("--what-if", "run_what_if", is_flag=True, help="Show what would happen")
@pass_cli_context
def new_image(
    cli: CliContext,
    resource_group: str,
    image_name: str,
    image_file: str,
    no_wait: bool,
    run_what_if: bool,
):
    """Create a managed image.

    \b
    Examples:
      $ azmgmt compute image new my-rg my-image image.json
      $ cat image.json | azmgmt compute image new my-rg my-image - --no-wait
    """
    _create_or_update(
        cli, resource_group, image_name, image_file, "New image", run_what_if, no_wait=no_wait
    )


@image_group.command(name="update")
@click.argument("resource_group")
@click.argument("image_name")
@click.argument("image_file")
@click.option("--what-if", "run_what_if", is_flag=True, help="Show what would happen")
@pass_cli_context
def update_image(
    cli: CliContext, resource_group: str, image_name: str, image_file: str, run_what_if: bool
):
    """Update a managed image from a JSON description."""
    _create_or_update(cli, resource_group, image_name, image_file, "Update image", run_what_if)


@image_group.command(name="get")
@click.argument("resource_group")
@click.argument("image_name")
@click.option("--expand", help="Expand expression for the request")
@pass_cli_context
def get_image(cli: CliContext, resource_group: str, image_name: str, expand: str | None):
    """Show a managed image."""
    with handle_errors():
        image = cli.images().get(resource_group, image_name, expand=expand)
        cli.renderer().image(image)


@image_group.command(name="list")
@click.option("--resource-group", "--rg", "resource_group", help="Limit to a resource group")
@click.option(
    "--max-count",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Maximum number of images (0 = all)",
)
@pass_cli_context
def list_images(cli: CliContext, resource_group: str | None, max_count: int):
    """List managed images in the subscription or a resource group."""
    with handle_errors():
        images = cli.images().list(resource_group=resource_group, max_count=max_count)
        cli.renderer().images(images)


@image_group.command(name="remove")
@click.argument("resource_group")
@click.argument("image_name")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation prompt")
@click.option("--no-wait", is_flag=True, help="Return without waiting for the deletion")
@pass_cli_context
def remove_image(
    cli: CliContext, resource_group: str, image_name: str, force: bool, no_wait: bool
):
    """Delete a managed image."""
    if not force:
        click.confirm(f"Delete image '{image_name}' in '{resource_group}'?", abort=True)
    with handle_errors():
        handle = cli.images().delete(resource_group, image_name, no_wait=no_wait)
        if handle is not None:
            cli.renderer().operation(handle)
        else:
            click.echo(f"Image '{image_name}' deleted.")


@compute_group.command(name="methods")
def list_compute_methods():
    """List operations available to 'compute invoke'."""
    table = Table(title="Compute Methods", show_header=True, header_style="bold")
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Parameters")
    table.add_column("Description")
    for method in methods.list_methods():
        params = ", ".join(p.name if p.mandatory else f"[{p.name}]" for p in method.parameters)
        table.add_row(method.name, params or "-", method.description)
    Console().print(table, markup=False)


@compute_group.command(name="argument-list")
@click.argument("method_name")
def argument_list(method_name: str):
    """Print an argument template for METHOD_NAME as JSON.

    Fill in the values and pass the file to 'compute invoke --argument-list'.
    """
    with handle_errors():
        arguments = methods.create_argument_list(method_name)
    click.echo(to_json([a.to_dict() for a in arguments]))


def _load_argument_list(path: str) -> list[Any]:
    data = load_json_input(path)
    if not isinstance(data, list):
        raise click.BadParameter("Argument list must be a JSON array", param_hint="--argument-list")
    return data


@compute_group.command(name="invoke")
@click.argument("method_name")
@click.argument("arguments", nargs=-1)
@click.option(
    "--argument-list",
    "argument_file",
    help="JSON file produced by 'compute argument-list' (- for stdin)",
)
@click.option("--force", "-f", is_flag=True, help="Skip confirmation for destructive methods")
@pass_cli_context
def invoke(
    cli: CliContext,
    method_name: str,
    arguments: tuple[str, ...],
    argument_file: str | None,
    force: bool,
):
    """Run a compute operation by name.

    ARGUMENTS are positional values in parameter order; JSON is accepted
    for structured parameters such as Image.

    \b
    Examples:
      $ azmgmt compute invoke ImageGet my-rg my-image
      $ azmgmt compute invoke ImageCreateOrUpdate --argument-list args.json
      $ azmgmt compute invoke ImageDelete my-rg my-image --force
    """
    if arguments and argument_file:
        raise click.UsageError("Pass either ARGUMENTS or --argument-list, not both")

    raw_arguments: list[Any] = _load_argument_list(argument_file) if argument_file else list(arguments)

    with handle_errors():
        # Validate before touching Azure so argument errors need no login
        method, parsed = methods.bind_arguments(method_name, raw_arguments)
        if method.destructive and not force:
            target = "/".join(str(v) for v in parsed)
            click.confirm(f"Run {method.name} on '{target}'? This cannot be undone", abort=True)
        result = methods.invoke_method(cli.images(), method.name, parsed)
        cli.renderer().result(result)
