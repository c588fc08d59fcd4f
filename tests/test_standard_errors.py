"""Tests for standard error codes and factories."""

from __future__ import annotations

import pytest

from jrpc import standard_errors as se
from jrpc.errors import JsonRpcException


class TestFactories:
    @pytest.mark.parametrize(
        ("factory", "code", "message"),
        [
            (se.parse_error, -32700, "Parse error"),
            (se.invalid_request, -32600, "Invalid Request"),
            (se.method_not_found, -32601, "Method not found"),
            (se.invalid_params, -32602, "Invalid params"),
            (se.internal_error, -32603, "Internal error"),
        ],
    )
    def test_standard_error(self, factory: object, code: int, message: str) -> None:
        err = factory()  # type: ignore[operator]
        assert err.code == code
        assert err.message == message
        assert not err.has_data

    def test_with_data(self) -> None:
        err = se.invalid_params({"field": "x"})
        assert err.data == {"field": "x"}


class TestServerError:
    @pytest.mark.parametrize("code", [-32000, -32050, -32099])
    def test_in_range(self, code: int) -> None:
        err = se.server_error(code, "Server busy", data="retry")
        assert err.code == code
        assert err.data == "retry"

    @pytest.mark.parametrize("code", [-32100, -31999, 0, -32700])
    def test_out_of_range(self, code: int) -> None:
        with pytest.raises(JsonRpcException) as info:
            se.server_error(code, "x")
        assert info.value.code == -32603
        assert "-32099 to -32000" in info.value.message


class TestRanges:
    @pytest.mark.parametrize(
        ("code", "reserved"),
        [(-32768, True), (-32000, True), (-32700, True), (-32769, False), (-31999, False), (0, False)],
    )
    def test_is_reserved_code(self, code: int, reserved: bool) -> None:
        assert se.is_reserved_code(code) is reserved

    @pytest.mark.parametrize(
        ("code", "server"),
        [(-32099, True), (-32000, True), (-32100, False), (-31999, False), (-32600, False)],
    )
    def test_is_server_error_code(self, code: int, server: bool) -> None:
        assert se.is_server_error_code(code) is server
