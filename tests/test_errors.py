"""Tests for the failure and advisory types."""

from __future__ import annotations

from jrpc.errors import JsonRpcAdvisoryWarning, JsonRpcException
from jrpc.models import JsonRpcError


class TestJsonRpcException:
    def test_accessors(self) -> None:
        exc = JsonRpcException(JsonRpcError.of(-32600, "Invalid Request", {"k": 1}))
        assert exc.code == -32600
        assert exc.message == "Invalid Request"
        assert exc.data == {"k": 1}
        assert str(exc) == "Invalid Request"

    def test_string_data_in_text(self) -> None:
        exc = JsonRpcException(JsonRpcError.of(-32600, "Invalid Request", "Missing 'method' field"))
        assert "Missing 'method' field" in str(exc)

    def test_not_a_value_error(self) -> None:
        assert not issubclass(JsonRpcException, ValueError)

    def test_to_response(self) -> None:
        err = JsonRpcError.of(-32601, "Method not found")
        resp = JsonRpcException(err).to_response("req-1")
        assert resp.is_error
        assert resp.id == "req-1"
        assert resp.error == err


class TestAdvisoryWarning:
    def test_is_user_warning(self) -> None:
        assert issubclass(JsonRpcAdvisoryWarning, UserWarning)
