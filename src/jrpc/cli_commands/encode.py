"""``jrpc encode`` — rewrite a JSON-RPC message in canonical wire form."""

from __future__ import annotations

import sys
from typing import IO

import click

from jrpc.cli_commands._output import KINDS, print_failure, read_message
from jrpc.codec import JsonRpcCodec
from jrpc.config import CodecConfig
from jrpc.errors import JsonRpcException


@click.command("encode")
@click.argument("message_file", type=click.File("r"))
@click.option("--kind", type=click.Choice(KINDS), default="auto", help="Message type.")
@click.option("--indent", type=int, default=None, help="Pretty-print with this indent.")
@click.option("--sort-keys", is_flag=True, help="Sort object keys.")
def encode(message_file: IO[str], kind: str, indent: int | None, sort_keys: bool) -> None:
    """Decode MESSAGE_FILE and print it re-encoded.

    Unknown envelope keys are dropped and field order is normalized.
    """
    codec = JsonRpcCodec(CodecConfig(indent=indent, sort_keys=sort_keys))
    try:
        _, message = read_message(message_file, kind, codec)
        text = codec.dumps(message)
    except JsonRpcException as exc:
        print_failure(exc)
        sys.exit(1)

    click.echo(text)
