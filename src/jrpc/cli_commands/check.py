"""``jrpc check`` — validate a JSON-RPC message file."""

from __future__ import annotations

import sys
from typing import IO

import click

from jrpc.cli_commands._output import (
    KINDS,
    console,
    print_advisories,
    print_failure,
    print_message,
    read_message,
)
from jrpc.codec import JsonRpcCodec
from jrpc.errors import JsonRpcException


@click.command("check")
@click.argument("message_file", type=click.File("r"))
@click.option(
    "--kind",
    type=click.Choice(KINDS),
    default="auto",
    help="Message type; guessed from the envelope keys by default.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the normalized message as JSON.")
def check(message_file: IO[str], kind: str, as_json: bool) -> None:
    """Decode and validate a JSON-RPC message.

    MESSAGE_FILE is a path to a JSON document, or ``-`` for stdin.  Exits
    with status 1 when the message violates the protocol.
    """
    codec = JsonRpcCodec()
    advisories: list[str] = []
    try:
        detected, message = read_message(message_file, kind, codec, sink=advisories.append)
    except JsonRpcException as exc:
        print_failure(exc)
        sys.exit(1)

    if as_json:
        console.print_json(codec.dumps(message))
    else:
        print_message(detected, message)
    print_advisories(advisories)
