"""Custom Click group with automatic help display on errors.

Usage errors print the error message followed by the help of the most
specific command, and unknown commands print the group help.
"""

from typing import Any

import click


class AzmgmtGroup(click.Group):
    """Custom Click group that auto-displays help on usage errors."""

    def invoke(self, ctx: click.Context) -> Any:
        """Handle usage errors with contextual help."""
        try:
            return super().invoke(ctx)
        except (
            click.exceptions.UsageError,
            click.exceptions.BadParameter,
            click.exceptions.MissingParameter,
        ) as e:
            click.echo(f"Error: {e.format_message()}", err=True)

            # Get the most specific context for help (the subcommand context if available)
            error_ctx = e.ctx if e.ctx is not None else ctx

            click.echo("", err=True)
            click.echo(error_ctx.get_help(), err=True)
            error_ctx.exit(e.exit_code)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        """Show help when a command is not found."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            click.echo(f"Error: {e.format_message()}", err=True)
            click.echo("", err=True)
            click.echo(ctx.get_help(), err=True)
            ctx.exit(2)


__all__ = ["AzmgmtGroup"]
