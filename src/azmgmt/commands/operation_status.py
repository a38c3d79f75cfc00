"""Operation status commands."""

import click

from azmgmt.click_group import AzmgmtGroup
from azmgmt.models.operation_status import (
    OperationStatus,
    parse_operation_status,
    to_serialized_value,
)

__all__ = ["operation_status_group"]


@click.group(name="operation-status", cls=AzmgmtGroup)
def operation_status_group():
    """Inspect long-running operation status values."""
    pass


@operation_status_group.command(name="list")
def list_statuses():
    """List known operation status values."""
    for status in OperationStatus:
        click.echo(to_serialized_value(status))


@operation_status_group.command(name="parse")
@click.argument("value")
def parse_status(value: str):
    """Parse VALUE as an operation status.

    Exits with status 1 when VALUE is not a known status. Matching is
    case-sensitive.
    """
    status = parse_operation_status(value)
    if status is None:
        click.echo(f"Unknown operation status: {value}", err=True)
        raise SystemExit(1)

    state = "terminal" if status.is_terminal else "non-terminal"
    click.echo(f"{status.value} ({state})")
