"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from jrpc.cli_commands.check import check
    from jrpc.cli_commands.encode import encode

    cli.add_command(check)
    cli.add_command(encode)
