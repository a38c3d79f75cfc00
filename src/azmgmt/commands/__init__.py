"""Command groups for azmgmt CLI."""

from azmgmt.commands.batch import batch_group
from azmgmt.commands.compute import compute_group
from azmgmt.commands.config import config_group
from azmgmt.commands.operation_status import operation_status_group

__all__ = ["batch_group", "compute_group", "config_group", "operation_status_group"]
