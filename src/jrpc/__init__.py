"""jrpc — JSON-RPC 2.0 message models with strict validation and a JSON codec."""

from __future__ import annotations

__version__ = "0.1.0"

from jrpc.codec import JsonRpcCodec  # noqa: E402
from jrpc.config import CodecConfig  # noqa: E402
from jrpc.errors import JsonRpcAdvisoryWarning, JsonRpcException  # noqa: E402
from jrpc.models import (  # noqa: E402
    ErrorBuilder,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestBuilder,
    RequestId,
)

__all__ = [
    "CodecConfig",
    "ErrorBuilder",
    "JsonRpcAdvisoryWarning",
    "JsonRpcCodec",
    "JsonRpcError",
    "JsonRpcException",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "RequestBuilder",
    "RequestId",
    "__version__",
]
