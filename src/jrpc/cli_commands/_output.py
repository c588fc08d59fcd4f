"""Shared CLI helpers — message loading and rich output."""

from __future__ import annotations

import json
from typing import IO, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jrpc.codec import JsonRpcCodec, Message, parse_json
from jrpc.errors import JsonRpcException
from jrpc.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse
from jrpc.validation import AdvisorySink

console = Console()

KINDS = ["auto", "request", "response", "error"]


def detect_kind(tree: Any) -> str:
    """Guess the message kind from the keys of a parsed envelope."""
    if isinstance(tree, dict):
        if "method" in tree:
            return "request"
        if "code" in tree and "jsonrpc" not in tree:
            return "error"
    return "response"


def read_message(
    fp: IO[str],
    kind: str,
    codec: JsonRpcCodec,
    sink: AdvisorySink | None = None,
) -> tuple[str, Message]:
    """Parse and decode one message from *fp*, returning ``(kind, message)``."""
    tree = parse_json(fp.read())

    if kind == "auto":
        kind = detect_kind(tree)
    if kind == "request":
        return kind, codec.decode_request(tree, sink=sink)
    if kind == "error":
        return kind, codec.decode_error(tree, sink=sink)
    return kind, codec.decode_response(tree, sink=sink)


def print_message(kind: str, message: Message) -> None:
    """Pretty-print a decoded message as a field table."""
    table = Table(title=f"JSON-RPC {kind}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for name, value in _summary(message):
        table.add_row(name, escape(_truncate(value)))

    console.print(table)


def print_failure(exc: JsonRpcException) -> None:
    console.print(f"[red]Invalid message:[/red] {escape(exc.message)}")
    console.print(f"  code: {exc.code}")
    if exc.data is not None:
        console.print(f"  data: {escape(str(exc.data))}")


def print_advisories(advisories: list[str]) -> None:
    for text in advisories:
        console.print(f"[yellow]advisory:[/yellow] {escape(text)}")


def _summary(message: Message) -> list[tuple[str, str]]:
    if isinstance(message, JsonRpcRequest):
        rows = [("jsonrpc", message.jsonrpc), ("method", message.method)]
        rows.append(("params", _dump(message.params) if message.has_params else "(absent)"))
        rows.append(("id", _dump(message.id) if message.has_id else "(notification)"))
        return rows
    if isinstance(message, JsonRpcResponse):
        rows = [("jsonrpc", message.jsonrpc), ("id", _dump(message.id))]
        if message.is_success:
            rows.append(("result", _dump(message.result)))
        elif message.error is not None:
            rows.extend(_summary(message.error))
        return rows
    assert isinstance(message, JsonRpcError)
    rows = [("code", str(message.code)), ("message", message.message)]
    if message.has_data:
        rows.append(("data", _dump(message.data)))
    return rows


def _dump(value: Any) -> str:
    return json.dumps(value, default=str)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
