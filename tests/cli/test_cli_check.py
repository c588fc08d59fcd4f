"""Tests for ``jrpc check`` and ``jrpc encode``."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner

from jrpc.cli import main
from jrpc.cli_commands._output import detect_kind

if TYPE_CHECKING:
    from pathlib import Path


def _write(tmp_path: Path, text: str) -> Path:
    f = tmp_path / "message.json"
    f.write_text(text)
    return f


class TestCheckCommand:
    def test_valid_request(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{"jsonrpc":"2.0","method":"subtract","params":[42,23],"id":1}')

        result = CliRunner().invoke(main, ["check", str(f)])

        assert result.exit_code == 0
        assert "subtract" in result.output
        assert "request" in result.output

    def test_notification(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{"jsonrpc":"2.0","method":"update"}')

        result = CliRunner().invoke(main, ["check", str(f)])

        assert result.exit_code == 0
        assert "(notification)" in result.output

    def test_error_response(self, tmp_path: Path) -> None:
        f = _write(
            tmp_path,
            '{"jsonrpc":"2.0","error":{"code":-32601,"message":"Method not found"},"id":1}',
        )

        result = CliRunner().invoke(main, ["check", str(f)])

        assert result.exit_code == 0
        assert "-32601" in result.output

    def test_invalid_message(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{"jsonrpc":"2.0","method":"rpc.x","id":1}')

        result = CliRunner().invoke(main, ["check", str(f)])

        assert result.exit_code == 1
        assert "reserved" in result.output
        assert "-32600" in result.output

    def test_bad_json(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "not json")

        result = CliRunner().invoke(main, ["check", str(f)])

        assert result.exit_code == 1
        assert "-32700" in result.output

    def test_forced_kind(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{"jsonrpc":"2.0","method":"m","id":1}')

        result = CliRunner().invoke(main, ["check", str(f), "--kind", "response"])

        assert result.exit_code == 1

    def test_stdin(self) -> None:
        result = CliRunner().invoke(
            main, ["check", "-"], input='{"jsonrpc":"2.0","result":19,"id":1}'
        )

        assert result.exit_code == 0
        assert "19" in result.output

    def test_json_output(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{"jsonrpc":"2.0","result":19,"id":1}')

        result = CliRunner().invoke(main, ["check", str(f), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"jsonrpc": "2.0", "result": 19, "id": 1}

    def test_advisory_reported(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{"jsonrpc":"2.0","method":"m","id":1.5}')

        result = CliRunner().invoke(main, ["check", str(f)])

        assert result.exit_code == 0
        assert "advisory" in result.output


class TestEncodeCommand:
    def test_normalizes(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{ "id": 1, "result": 19, "jsonrpc": "2.0" }')

        result = CliRunner().invoke(main, ["encode", str(f)])

        assert result.exit_code == 0
        assert result.output.strip() == '{"jsonrpc":"2.0","result":19,"id":1}'

    def test_sort_keys(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{"jsonrpc":"2.0","method":"m","id":"a"}')

        result = CliRunner().invoke(main, ["encode", str(f), "--sort-keys"])

        assert result.output.strip() == '{"id":"a","jsonrpc":"2.0","method":"m"}'

    def test_invalid(self, tmp_path: Path) -> None:
        f = _write(tmp_path, '{"jsonrpc":"2.0","id":1}')

        result = CliRunner().invoke(main, ["encode", str(f)])

        assert result.exit_code == 1


class TestDetectKind:
    def test_request(self) -> None:
        assert detect_kind({"method": "m"}) == "request"

    def test_error_object(self) -> None:
        assert detect_kind({"code": 1, "message": "x"}) == "error"

    def test_response(self) -> None:
        assert detect_kind({"jsonrpc": "2.0", "result": 1, "id": 1}) == "response"
        assert detect_kind([1]) == "response"


def test_version() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
