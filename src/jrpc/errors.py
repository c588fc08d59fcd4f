"""Failure and advisory types shared by the whole package."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jrpc.models import JsonRpcError, JsonRpcResponse, RequestId


class JsonRpcException(Exception):
    """A JSON-RPC protocol violation carrying a structured error object.

    Every validation and decoding failure in ``jrpc`` surfaces as this one
    exception type.  Callers translate it into an error response with
    :meth:`to_response`.

    Not a ``ValueError`` subclass, so it passes through pydantic validators
    unchanged instead of being wrapped in a ``ValidationError``.
    """

    def __init__(self, error: JsonRpcError) -> None:
        self.error = error
        text = error.message
        if isinstance(error.data, str):
            text += f" ({error.data})"
        super().__init__(text)

    @property
    def code(self) -> int:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def data(self) -> Any:
        return self.error.data

    def to_response(self, request_id: RequestId = None) -> JsonRpcResponse[Any]:
        """Build the error response a server would send for this failure."""
        from jrpc.models import JsonRpcResponse

        return JsonRpcResponse.failure(request_id, self.error)


class JsonRpcAdvisoryWarning(UserWarning):
    """Discouraged-but-legal value (fractional id, multi-sentence message)."""
