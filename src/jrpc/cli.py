"""jrpc CLI entrypoint."""

from __future__ import annotations

import click

from jrpc import __version__


@click.group()
@click.version_option(version=__version__, prog_name="jrpc")
def main() -> None:
    """jrpc — inspect and normalize JSON-RPC 2.0 messages."""


# Register subcommands
from jrpc.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
