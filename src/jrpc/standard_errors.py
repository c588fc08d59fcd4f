"""Predefined JSON-RPC 2.0 error codes and error-object factories.

Standard codes:

* ``-32700`` Parse error — invalid JSON was received
* ``-32600`` Invalid Request — the JSON sent is not a valid Request object
* ``-32601`` Method not found
* ``-32602`` Invalid params
* ``-32603`` Internal error

``-32768..-32000`` is reserved for predefined errors, and ``-32099..-32000``
for implementation-defined server errors.
"""

from __future__ import annotations

from typing import Any

from jrpc.errors import JsonRpcException
from jrpc.models import JsonRpcError

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

SERVER_ERROR_MIN = -32099
SERVER_ERROR_MAX = -32000
RESERVED_ERROR_MIN = -32768
RESERVED_ERROR_MAX = -32000

PARSE_ERROR_MSG = "Parse error"
INVALID_REQUEST_MSG = "Invalid Request"
METHOD_NOT_FOUND_MSG = "Method not found"
INVALID_PARAMS_MSG = "Invalid params"
INTERNAL_ERROR_MSG = "Internal error"


def parse_error(data: Any = None) -> JsonRpcError:
    return JsonRpcError.of(PARSE_ERROR, PARSE_ERROR_MSG, data)


def invalid_request(data: Any = None) -> JsonRpcError:
    return JsonRpcError.of(INVALID_REQUEST, INVALID_REQUEST_MSG, data)


def method_not_found(data: Any = None) -> JsonRpcError:
    return JsonRpcError.of(METHOD_NOT_FOUND, METHOD_NOT_FOUND_MSG, data)


def invalid_params(data: Any = None) -> JsonRpcError:
    return JsonRpcError.of(INVALID_PARAMS, INVALID_PARAMS_MSG, data)


def internal_error(data: Any = None) -> JsonRpcError:
    return JsonRpcError.of(INTERNAL_ERROR, INTERNAL_ERROR_MSG, data)


def server_error(code: int, message: str, data: Any = None) -> JsonRpcError:
    """Create an implementation-defined server error.

    Raises:
        JsonRpcException: ``-32603`` if ``code`` is outside ``-32099..-32000``.
    """
    if not is_server_error_code(code):
        raise JsonRpcException(
            JsonRpcError.of(
                INTERNAL_ERROR,
                f"Server error code must be in range {SERVER_ERROR_MIN} to {SERVER_ERROR_MAX}",
            )
        )
    return JsonRpcError.of(code, message, data)


def is_reserved_code(code: int) -> bool:
    return RESERVED_ERROR_MIN <= code <= RESERVED_ERROR_MAX


def is_server_error_code(code: int) -> bool:
    return SERVER_ERROR_MIN <= code <= SERVER_ERROR_MAX
