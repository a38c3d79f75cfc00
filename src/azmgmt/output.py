"""Output rendering for CLI commands.

Results are rendered either as rich tables (default) or as JSON. JSON output
is indented and keys are sorted so it diffs cleanly.
"""

import json
from collections.abc import Sequence
from enum import Enum
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from azmgmt import image_mapper
from azmgmt.long_running import OperationHandle
from azmgmt.models.batch_account import BatchAccountContext
from azmgmt.models.image import ImageSpec
from azmgmt.models.node_agent_sku import NodeAgentSku


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, sort_keys=True, default=_json_default)


def _format_tags(tags: dict[str, str]) -> str:
    if not tags:
        return "-"
    return ", ".join(f"{k}={v}" for k, v in sorted(tags.items()))


def _cell(value: Any) -> str:
    return "-" if value is None or value == "" else escape(str(value))


class OutputRenderer:
    """Render command results as tables or JSON."""

    def __init__(self, output_format: str = "table", console: Console | None = None):
        self.output_format = output_format
        self.console = console or Console()

    @property
    def is_json(self) -> bool:
        return self.output_format == "json"

    def _print_json(self, data: Any) -> None:
        # Plain print so JSON is never wrapped or styled
        self.console.print(to_json(data), markup=False, highlight=False, soft_wrap=True)

    # Batch accounts

    def batch_account(self, account: BatchAccountContext, show_keys: bool = False) -> None:
        if self.is_json:
            self._print_json(account.to_dict(include_keys=show_keys))
            return

        table = Table(title=f"Batch account {escape(account.account_name)}", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        for key, value in account.to_dict(include_keys=show_keys).items():
            if key == "tags":
                value = _format_tags(value)
            table.add_row(key, _cell(value))
        self.console.print(table)

    def batch_accounts(self, accounts: Sequence[BatchAccountContext]) -> None:
        if self.is_json:
            self._print_json([a.to_dict() for a in accounts])
            return

        if not accounts:
            self.console.print("No Batch accounts found.")
            return

        table = Table(title="Batch Accounts", show_header=True, header_style="bold")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Resource Group")
        table.add_column("Location")
        table.add_column("State")
        table.add_column("Endpoint")
        table.add_column("Tags")
        for account in accounts:
            table.add_row(
                _cell(account.account_name),
                _cell(account.resource_group),
                _cell(account.location),
                _cell(account.provisioning_state),
                _cell(account.account_endpoint),
                escape(_format_tags(account.tags)),
            )
        self.console.print(table)
        self.console.print(f"\nTotal: {len(accounts)} account(s)")

    def node_agent_skus(self, skus: Sequence[NodeAgentSku]) -> None:
        if self.is_json:
            self._print_json([s.to_dict() for s in skus])
            return

        if not skus:
            self.console.print("No node agent SKUs found.")
            return

        table = Table(title="Node Agent SKUs", show_header=True, header_style="bold")
        table.add_column("Node Agent SKU", style="cyan", no_wrap=True)
        table.add_column("OS")
        table.add_column("Verified Images")
        for sku in skus:
            table.add_row(
                _cell(sku.id),
                _cell(sku.os_type),
                escape("\n".join(sku.verified_image_references)) or "-",
            )
        self.console.print(table)
        self.console.print(f"\nTotal: {len(skus)} SKU(s)")

    # Images

    def image(self, image: ImageSpec) -> None:
        if self.is_json:
            self._print_json(image_mapper.to_dict(image))
            return

        table = Table(title=f"Image {escape(image.name or '')}", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        table.add_row("name", _cell(image.name))
        table.add_row("resource_group", _cell(image.resource_group))
        table.add_row("location", _cell(image.location))
        table.add_row("os_type", _cell(image.os_type))
        table.add_row("source_virtual_machine", _cell(image.source_virtual_machine_id))
        table.add_row("hyper_v_generation", _cell(image.hyper_v_generation))
        table.add_row("provisioning_state", _cell(image.provisioning_state))
        data_disks = image.storage_profile.data_disks if image.storage_profile else []
        table.add_row("data_disks", str(len(data_disks)))
        table.add_row("tags", escape(_format_tags(image.tags)))
        table.add_row("id", _cell(image.id))
        self.console.print(table)

    def images(self, images: Sequence[ImageSpec]) -> None:
        if self.is_json:
            self._print_json([image_mapper.to_dict(i) for i in images])
            return

        if not images:
            self.console.print("No images found.")
            return

        table = Table(title="Managed Images", show_header=True, header_style="bold")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Resource Group")
        table.add_column("Location")
        table.add_column("OS")
        table.add_column("State")
        for image in images:
            table.add_row(
                _cell(image.name),
                _cell(image.resource_group),
                _cell(image.location),
                _cell(image.os_type),
                _cell(image.provisioning_state),
            )
        self.console.print(table)
        self.console.print(f"\nTotal: {len(images)} image(s)")

    # Generic

    def operation(self, handle: OperationHandle) -> None:
        if self.is_json:
            self._print_json(handle.to_dict())
            return
        self.console.print(f"{escape(handle.operation)}: {escape(handle.display_status)}")
        if handle.continuation_token:
            self.console.print("[dim]Continuation token available (use --output json)[/dim]")

    def result(self, value: Any) -> None:
        """Render any result returned by a compute method."""
        if isinstance(value, OperationHandle):
            self.operation(value)
        elif isinstance(value, ImageSpec):
            self.image(value)
        elif isinstance(value, list) and all(isinstance(v, ImageSpec) for v in value):
            self.images(value)
        elif value is None:
            if self.is_json:
                self._print_json(None)
            else:
                self.console.print("Done.")
        else:
            self._print_json(value)


__all__ = ["OutputRenderer", "to_json"]
