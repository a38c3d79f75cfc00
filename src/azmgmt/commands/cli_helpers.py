"""Shared helpers for CLI commands.

The root command stores a CliContext on ctx.obj; subcommands use it to get
configuration, Azure clients and the output renderer. handle_errors() turns
project exceptions into a sanitized "Error: ..." line and exit status 1.
"""

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import click

from azmgmt.batch.account_client import BatchAccountClient, BatchAccountError
from azmgmt.client_factory import ManagementClients
from azmgmt.compute.image_client import ImageClient, ImageOperationError
from azmgmt.compute.methods import MethodInvocationError
from azmgmt.config_manager import AzmgmtConfig, ConfigError, ConfigManager
from azmgmt.credential_factory import CredentialFactoryError
from azmgmt.image_mapper import ImageMappingError
from azmgmt.log_sanitizer import LogSanitizer
from azmgmt.output import OutputRenderer
from azmgmt.resource_group_discovery import ResourceGroupDiscoveryError
from azmgmt.resource_id import ResourceIdError
from azmgmt.tag_manager import TagError

logger = logging.getLogger(__name__)

HANDLED_ERRORS = (
    BatchAccountError,
    ConfigError,
    CredentialFactoryError,
    ImageMappingError,
    ImageOperationError,
    MethodInvocationError,
    ResourceGroupDiscoveryError,
    ResourceIdError,
    TagError,
    ValueError,
)


@dataclass
class CliContext:
    """Per-invocation state shared by all commands."""

    config_path: str | None = None
    subscription_id: str | None = None
    output_format: str | None = None
    _config: AzmgmtConfig | None = field(default=None, repr=False)
    _clients: ManagementClients | None = field(default=None, repr=False)

    @property
    def config(self) -> AzmgmtConfig:
        if self._config is None:
            self._config = ConfigManager.load_config(self.config_path)
        return self._config

    @property
    def clients(self) -> ManagementClients:
        if self._clients is None:
            self._clients = ManagementClients.from_config(
                self.config, subscription_id=self.subscription_id, config_path=self.config_path
            )
        return self._clients

    def batch_accounts(self) -> BatchAccountClient:
        return BatchAccountClient(self.clients.batch, self.clients.resource)

    def images(self) -> ImageClient:
        return ImageClient(self.clients.compute)

    def renderer(self) -> OutputRenderer:
        return OutputRenderer(self.output_format or self.config.output_format)

    def resource_group(self, cli_value: str | None) -> str | None:
        """Resource group for new resources: the CLI value, else the configured default.

        Commands on existing resources pass the CLI value through so an
        omitted group is looked up instead.
        """
        return cli_value or self.config.default_resource_group

    def location(self, cli_value: str | None) -> str | None:
        return cli_value or self.config.default_location


pass_cli_context = click.make_pass_decorator(CliContext, ensure=True)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report project errors on stderr and exit with status 1."""
    try:
        yield
    except HANDLED_ERRORS as e:
        message = LogSanitizer.create_safe_error_message(e)
        logger.debug(f"Command failed: {type(e).__name__}", exc_info=True)
        click.echo(f"Error: {message}", err=True)
        sys.exit(1)


def load_json_input(source: str) -> Any:
    """Load JSON from a file path, or from stdin when source is "-".

    Raises:
        click.BadParameter: If the input cannot be read or parsed
    """
    try:
        with click.open_file(source) as f:
            text = f.read()
    except OSError as e:
        raise click.BadParameter(f"Cannot read {source}: {e.strerror}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON in {source}: {e}") from e


def what_if(action: str, target: str) -> None:
    """Describe an operation that --what-if skipped."""
    click.echo(f'What if: Performing the operation "{action}" on target "{target}".')


__all__ = [
    "CliContext",
    "handle_errors",
    "load_json_input",
    "pass_cli_context",
    "what_if",
]
