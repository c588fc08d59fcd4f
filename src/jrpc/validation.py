"""Protocol constraint checks for JSON-RPC 2.0 values.

Each ``validate_*`` function either returns silently or raises
:class:`~jrpc.errors.JsonRpcException` with a protocol-correct error object.
Request-side violations (method, id, version) use ``-32600`` Invalid Request;
error-object violations (message) use ``-32603`` Internal Error since a
malformed outbound error is the server's own bug.

Some values are legal but discouraged (fractional numeric ids, error messages
longer than one sentence).  Those produce *advisories* through a sink instead
of failing::

    seen: list[str] = []
    validate_id(1.5, sink=seen.append)
    assert seen  # advisory recorded, nothing raised

When no sink is given, :func:`log_advisory` is used: a ``logger.warning``
plus a :class:`~jrpc.errors.JsonRpcAdvisoryWarning`.
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Callable
from typing import Any

from jrpc.errors import JsonRpcAdvisoryWarning, JsonRpcException

logger = logging.getLogger(__name__)

AdvisorySink = Callable[[str], None]

JSONRPC_VERSION = "2.0"
RESERVED_METHOD_PREFIX = "rpc."
ADVISORY_SINK_KEY = "advisory_sink"

_INVALID_REQUEST = -32600
_INTERNAL_ERROR = -32603
_FRACTION_EPSILON = 1e-10
_SENTENCE_TERMINATORS = frozenset(".!?")


def log_advisory(message: str) -> None:
    """Default advisory sink: log a warning and issue a Python warning."""
    logger.warning(message)
    warnings.warn(message, JsonRpcAdvisoryWarning, stacklevel=4)


def resolve_sink(sink: AdvisorySink | None) -> AdvisorySink:
    return sink if sink is not None else log_advisory


def _fail(code: int, message: str) -> JsonRpcException:
    from jrpc.models import JsonRpcError

    return JsonRpcException(JsonRpcError.of(code, message))


def validate_method(method: Any) -> None:
    """Reject blank method names and the reserved ``rpc.`` prefix.

    The prefix check is anchored at index 0: ``"myrpc.foo"`` is fine.
    """
    if not isinstance(method, str) or not method.strip():
        raise _fail(_INVALID_REQUEST, "Invalid Request: method name cannot be null or empty")

    if method.startswith(RESERVED_METHOD_PREFIX):
        raise _fail(
            _INVALID_REQUEST,
            "Invalid Request: method names starting with 'rpc.' are reserved",
        )


def validate_id(request_id: Any, sink: AdvisorySink | None = None) -> None:
    """Accept ``None``, strings and numbers; reject everything else.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if request_id is None or isinstance(request_id, str):
        return

    if isinstance(request_id, bool) or not isinstance(request_id, (int, float)):
        raise _fail(_INVALID_REQUEST, "Invalid Request: id must be a String, Number, or null")

    if isinstance(request_id, float) and (
        not math.isfinite(request_id)
        or abs(request_id - math.floor(request_id)) > _FRACTION_EPSILON
    ):
        resolve_sink(sink)(
            f"JSON-RPC id contains fractional parts, which is discouraged: {request_id}"
        )


def validate_error_code(code: int) -> None:
    """Hook for error code rules; every integer is currently accepted."""


def validate_message(message: Any, sink: AdvisorySink | None = None) -> None:
    """Require a non-blank error message, advising when it spans sentences."""
    if not isinstance(message, str) or not message.strip():
        raise _fail(_INTERNAL_ERROR, "Internal Error: error message cannot be null or empty")

    terminators = sum(1 for ch in message.strip() if ch in _SENTENCE_TERMINATORS)
    if terminators > 1:
        resolve_sink(sink)(f"Error message should be a single sentence: {message}")


def validate_version(version: Any) -> None:
    if version != JSONRPC_VERSION or not isinstance(version, str):
        raise _fail(_INVALID_REQUEST, "Invalid Request: jsonrpc version must be '2.0'")
